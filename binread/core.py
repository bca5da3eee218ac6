"""核心解码契约.

所有可读取类型都满足同一个结构化协议 `Readable`:

    T.read_options(reader, options, args) -> value   # 第一阶段: 解码
    T.after_parse(value, reader, options, args)       # 第二阶段: 后处理
    T.default_args() -> args                          # 默认参数

有两种实现方式:
    - `BinType`: 描述符实例 (如 `U32`, `Vec(U16)`), 解码结果是普通 Python 对象.
    - `BinRead`: 类本身就是可读取类型, 实例就是解码结果 (如 `BinStruct`).

`BinRead.after_parse` 是实例方法, 因此 `T.after_parse(value, ...)`
对两种实现的调用形式完全相同.
"""

import abc
import copy
from typing import Any, Protocol, TypeVar, runtime_checkable

from .config import ReadOptions
from .reader import Stream

B = TypeVar("B", bound="BinRead")

# 空参数 (unit)
NO_ARGS: tuple[()] = ()


@runtime_checkable
class Readable(Protocol):
    """可读取类型的结构化协议."""

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> Any: ...

    def after_parse(
        self, value: Any, reader: Stream, options: ReadOptions, args: Any
    ) -> None: ...

    def default_args(self) -> Any: ...


def clone_args(args: Any) -> Any:
    """复制参数值.

    - 提供 `clone()` 方法的对象由其自身决定复制语义.
    - 可变内置容器做浅复制.
    - 其他值 (不可变) 直接共享.
    """
    clone = getattr(args, "clone", None)
    if callable(clone):
        return clone()
    if isinstance(args, list | dict | set | bytearray):
        return copy.copy(args)
    return args


def parse(target: Any, reader: Stream, options: ReadOptions, args: Any) -> Any:
    """执行完整的两阶段解码.

    第一阶段使用参数的副本, 第二阶段使用原参数.
    """
    value = target.read_options(reader, options, clone_args(args))
    target.after_parse(value, reader, options, args)
    return value


class BinType(abc.ABC):
    """描述符形式的可读取类型基类.

    子类实现 `read_options()`, 按需覆盖 `after_parse()` 和 `default_args()`.
    """

    __slots__ = ()

    @abc.abstractmethod
    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> Any:
        """从流的当前位置读取一个值.

        Args:
            reader: 可定位的二进制流.
            options: 解码配置.
            args: 该类型的参数.

        Returns:
            Any: 解码出的值, 流位于已消耗字节之后.
        """
        raise NotImplementedError

    def after_parse(
        self, value: Any, reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        """第二阶段后处理, 默认不做任何事."""
        return None

    def default_args(self) -> Any:
        """返回默认参数."""
        return NO_ARGS

    def read(self, reader: Stream) -> Any:
        """使用默认参数和主机字节序读取."""
        return parse(self, reader, ReadOptions(), self.default_args())

    def read_args(self, reader: Stream, args: Any) -> Any:
        """使用给定参数和主机字节序读取."""
        return parse(self, reader, ReadOptions(), args)

    def __repr__(self) -> str:
        return type(self).__name__


class BinRead(abc.ABC):
    """类形式的可读取类型基类.

    手写实现示例:
        >>> class Point(BinRead):
        ...     def __init__(self, x: int, y: int):
        ...         self.x, self.y = x, y
        ...
        ...     @classmethod
        ...     def read_options(cls, reader, options, args):
        ...         return cls(U16.read_options(reader, options, ()),
        ...                    U16.read_options(reader, options, ()))
    """

    @classmethod
    @abc.abstractmethod
    def read_options(
        cls: type[B], reader: Stream, options: ReadOptions, args: Any
    ) -> B:
        """从流的当前位置读取一个实例."""
        raise NotImplementedError

    def after_parse(self, reader: Stream, options: ReadOptions, args: Any) -> None:
        """第二阶段后处理, 默认不做任何事."""
        return None

    @classmethod
    def default_args(cls) -> Any:
        """返回默认参数."""
        return NO_ARGS

    @classmethod
    def read(cls: type[B], reader: Stream) -> B:
        """使用默认参数和主机字节序读取."""
        return parse(cls, reader, ReadOptions(), cls.default_args())

    @classmethod
    def read_args(cls: type[B], reader: Stream, args: Any) -> B:
        """使用给定参数和主机字节序读取."""
        return parse(cls, reader, ReadOptions(), args)


def default_args_of(target: Any) -> Any:
    """返回目标类型的默认参数.

    Raises:
        TypeError: `target` 不是可读取类型.
        MissingArgumentError: 参数没有默认值.
    """
    default_args = getattr(target, "default_args", None)
    if not callable(default_args):
        raise TypeError(f"{target!r} is not a readable type")
    return default_args()
