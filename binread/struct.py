"""声明式结构体定义模块.

`BinStruct` 是按字段声明生成 `BinRead` 实现的上层工具,
核心引擎并不依赖它.
"""

from collections.abc import Callable, Mapping
from typing import Any, ClassVar, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined
from typing_extensions import dataclass_transform

from .args import NamedArgs
from .config import ReadOptions
from .containers import VecArgs
from .core import NO_ARGS, BinRead, clone_args
from .exceptions import BadMagicError, CustomError
from .log import logger
from .options import Endian
from .reader import Stream, read_exact, stream_position

S = TypeVar("S", bound="BinStruct")

# 常量参数, 或接收 ReadContext 的回调
ArgsSource = Any


class ReadContext(Mapping[str, Any]):
    """传给字段参数回调的上下文.

    以属性或下标访问已读取的字段, `args` 为结构体自身的参数.
    """

    __slots__ = ("_fields", "args")

    def __init__(self, fields: dict[str, Any], args: Any) -> None:
        self._fields = fields
        self.args = args

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"Field {name!r} has not been read yet") from None

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)


def BinField(
    bin_type: Any,
    default: Any = PydanticUndefined,
    *,
    args: ArgsSource = None,
    count: int | str | Callable[[ReadContext], int] | None = None,
    endian: Endian | None = None,
    default_factory: Any | None = None,
) -> Any:
    """创建结构体字段配置.

    这是 Pydantic `Field` 的包装函数, 注入解码所需的元数据.

    Args:
        bin_type: 字段的可读取类型 (如 `U32`, `Vec(U8)`, 另一个 `BinStruct`).
        default: 直接构造实例时的默认值, 解码时总是从流中读取.
        args: 字段参数. 可以是常量, 也可以是接收 `ReadContext` 的回调.
        count: `Vec` 字段的元素个数. 可以是整数、之前字段的名称或回调.
            提供时 `args` 作为每个元素的参数.
        endian: 覆盖该字段的字节序.
        default_factory: 生成默认值的无参可调用对象.

    Returns:
        Any: 包含解码元数据的 Pydantic FieldInfo 对象.

    Examples:
        >>> class Table(BinStruct):
        ...     count: int = BinField(U16)
        ...     rows: list[int] = BinField(Vec(U32), count="count")
    """
    json_schema_extra = {
        "bin_type": bin_type,
        "bin_args": args,
        "bin_count": count,
        "bin_endian": endian,
    }

    kwargs: dict[str, Any] = {"json_schema_extra": json_schema_extra}
    if default is not PydanticUndefined:
        kwargs["default"] = default
    if default_factory is not None:
        kwargs["default_factory"] = default_factory

    return cast(Any, Field)(**kwargs)


class BinModelField:
    """表示一个 BinStruct 模型字段的解码元数据."""

    __slots__ = ("args", "bin_type", "count", "endian", "name")

    def __init__(
        self,
        name: str,
        bin_type: Any,
        args: ArgsSource = None,
        count: Any = None,
        endian: Endian | None = None,
    ) -> None:
        self.name = name
        self.bin_type = bin_type
        self.args = args
        self.count = count
        self.endian = endian

    @classmethod
    def from_field_info(cls, name: str, field_info: FieldInfo) -> "BinModelField":
        """从 FieldInfo 创建 BinModelField."""
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or "bin_type" not in extra:
            raise ValueError(f"Field {name!r} is missing BinField configuration")

        bin_type = extra["bin_type"]
        if not callable(getattr(bin_type, "read_options", None)):
            raise TypeError(f"Field {name!r}: {bin_type!r} is not a readable type")

        return cls(
            name,
            bin_type,
            args=extra.get("bin_args"),
            count=extra.get("bin_count"),
            endian=cast(Endian | None, extra.get("bin_endian")),
        )

    def options_for(self, options: ReadOptions) -> ReadOptions:
        """字段使用的解码配置."""
        if self.endian is None:
            return options
        return options.with_endian(self.endian)

    def args_for(self, ctx: ReadContext) -> Any:
        """根据已读取的字段计算该字段的参数."""
        args = self.args(ctx) if callable(self.args) else self.args

        if self.count is not None:
            if isinstance(self.count, str):
                count = ctx[self.count]
            elif callable(self.count):
                count = self.count(ctx)
            else:
                count = self.count
            builder = VecArgs.builder().count(count)
            if args is not None:
                builder.inner(args)
            return builder.finalize()

        if args is None:
            return self.bin_type.default_args()
        return args


def prepare_fields(fields: dict[str, FieldInfo]) -> dict[str, BinModelField]:
    """准备解码字段映射, 保持声明顺序."""
    bin_fields = {}
    for name, field in fields.items():
        extra = field.json_schema_extra
        if isinstance(extra, dict) and "bin_type" in extra:
            bin_fields[name] = BinModelField.from_field_info(name, field)
        elif field.exclude is not True:
            raise ValueError(
                f"Field {name!r} is missing BinField configuration. "
                f"Use BinField(U32) to configure it."
            )
    return bin_fields


@dataclass_transform(kw_only_default=True, field_specifiers=(BinField,))
class BinStructMeta(type(BaseModel)):
    """BinStruct 的元类, 用于收集字段解码信息."""

    def __new__(  # noqa: D102
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ):
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)
        if name != "BinStruct":
            cls.__bin_fields__ = prepare_fields(cls.model_fields)
        return cls


class BinStruct(BaseModel, BinRead, metaclass=BinStructMeta):
    """声明式二进制结构体基类.

    字段按声明顺序解码. 第二阶段同样按声明顺序对每个字段调用 `after_parse`,
    配置和参数由已解码的字段值重新计算, 实例本身不保留它们.

    类属性:
        magic: 结构体开头的魔数, 不匹配时抛出 `BadMagicError`.
        Args: 结构体自身的参数类型 (`NamedArgs` 子类), 省略时为空参数.

    Examples:
        >>> class Header(BinStruct):
        ...     magic: ClassVar[bytes] = b"HDR"
        ...     length: int = BinField(U16, endian=Endian.BIG)
        ...     body: list[int] = BinField(Vec(U8), count="length")
        >>> Header.read(BytesIO(b"HDR\\x00\\x02\\x0a\\x0b")).body
        [10, 11]
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    __bin_fields__: ClassVar[dict[str, BinModelField]] = {}

    magic: ClassVar[bytes | None] = None
    Args: ClassVar[type[NamedArgs] | None] = None

    @classmethod
    def default_args(cls) -> Any:
        """结构体的默认参数."""
        if cls.Args is None:
            return NO_ARGS
        return cls.Args.builder().finalize()

    @classmethod
    def read_options(
        cls: type[S], reader: Stream, options: ReadOptions, args: Any
    ) -> S:
        """按声明顺序解码所有字段."""
        pos = stream_position(reader)

        if cls.magic is not None:
            found = read_exact(reader, len(cls.magic))
            if found != cls.magic:
                raise BadMagicError(
                    f"Bad magic for {cls.__name__}: "
                    f"expected {cls.magic!r}, found {found!r}",
                    pos,
                    found,
                )

        values: dict[str, Any] = {}
        ctx = ReadContext(values, args)

        for name, field in cls.__bin_fields__.items():
            field_options = field.options_for(options)
            field_args = field.args_for(ctx)
            values[name] = field.bin_type.read_options(
                reader, field_options, clone_args(field_args)
            )

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            logger.debug("[BinStruct] %s 字段校验失败: %s", cls.__name__, e)
            raise CustomError(f"Invalid field values for {cls.__name__}: {e}", pos) from e

    def after_parse(self, reader: Stream, options: ReadOptions, args: Any) -> None:
        """按声明顺序对每个字段执行第二阶段."""
        ctx = ReadContext(dict(self), args)
        for name, field in type(self).__bin_fields__.items():
            field.bin_type.after_parse(
                getattr(self, name),
                reader,
                field.options_for(options),
                clone_args(field.args_for(ctx)),
            )

    @classmethod
    def model_validate_bin(
        cls: type[S],
        data: bytes | bytearray | memoryview,
        endian: Endian = Endian.NATIVE,
        args: Any = None,
    ) -> S:
        """从字节数据解码结构体实例.

        Args:
            data: 输入数据.
            endian: 字节序.
            args: 结构体参数, 省略时使用 `default_args()`.

        Returns:
            S: 结构体实例.
        """
        from .api import loads

        return cast(S, loads(data, cls, endian=endian, args=args))
