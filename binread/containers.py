"""复合可读取类型.

- `Vec`: 变长同构序列, 参数为 `VecArgs(count, inner)`.
- `Array`: 定长序列, 参数与元素类型相同.
- `Tuple`: 异构元组, 每个位置都使用空参数.
- `Option` / `Box`: 包装类型, 参数与被包装类型相同.

复合类型在失败时不恢复流位置, 调用方需要自行重新定位.
"""

from typing import Any

from .args import ArgField, NamedArgs
from .config import ReadOptions
from .core import NO_ARGS, BinType, clone_args
from .exceptions import MissingArgumentError, NotEnoughBytesError
from .reader import Stream, read_up_to, stream_position
from .types import U8

MAX_TUPLE_ARITY = 32

_ELEMENT_DEFAULT: Any = object()


class VecArgs(NamedArgs):
    """`Vec` 的参数.

    Attributes:
        count: 要读取的元素个数.
        inner: 传给每个元素的参数, 省略时为空参数.
    """

    count: int = ArgField(ge=0)
    inner: Any = ArgField((), try_optional=True)


class Vec(BinType):
    """变长同构序列, 解码为 `list`.

    元素类型恰好是 `U8` 时, 一次性批量读取 `count` 字节,
    结果与逐个元素解码完全一致.

    Examples:
        >>> Vec(U16).read_args(BytesIO(b"\\x04\\x00\\x05\\x00"), VecArgs(count=2))
        [4, 5]
    """

    __slots__ = ("element",)

    def __init__(self, element: Any) -> None:
        self.element = element

    def read_options(
        self, reader: Stream, options: ReadOptions, args: VecArgs
    ) -> list[Any]:
        count = args.count

        if self.element is U8:
            pos = stream_position(reader)
            data = read_up_to(reader, count)
            if len(data) != count:
                raise NotEnoughBytesError(
                    f"Not enough bytes in reader: needed {count}, got {len(data)}",
                    pos,
                )
            return list(data)

        element = self.element
        inner = args.inner
        items = []
        for _ in range(count):
            items.append(element.read_options(reader, options, clone_args(inner)))
        return items

    def after_parse(
        self, value: list[Any], reader: Stream, options: ReadOptions, args: VecArgs
    ) -> None:
        for item in value:
            self.element.after_parse(item, reader, options, clone_args(args.inner))

    def default_args(self) -> Any:
        raise MissingArgumentError(f"{self!r} requires VecArgs with an explicit count")

    def args(self, count: int, inner: Any = _ELEMENT_DEFAULT) -> VecArgs:
        """构建参数, 省略 `inner` 时使用元素类型的默认参数."""
        builder = VecArgs.builder().count(count)
        if inner is _ELEMENT_DEFAULT:
            try:
                inner = self.element.default_args()
            except MissingArgumentError as e:
                raise MissingArgumentError(
                    f"{self!r} needs explicit inner args: {e}"
                ) from e
        if inner != NO_ARGS:
            builder.inner(inner)
        return builder.finalize()

    def __repr__(self) -> str:
        return f"Vec({self.element!r})"


class Array(BinType):
    """定长序列, 解码为长度为 `length` 的 `list`.

    任一元素失败时整体失败, 不返回部分数组.
    """

    __slots__ = ("element", "length")

    def __init__(self, element: Any, length: int) -> None:
        if length < 0:
            raise ValueError(f"Array length must be >= 0, got {length}")
        self.element = element
        self.length = length

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> list[Any]:
        element = self.element
        return [
            element.read_options(reader, options, clone_args(args))
            for _ in range(self.length)
        ]

    def after_parse(
        self, value: list[Any], reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        for item in value:
            self.element.after_parse(item, reader, options, clone_args(args))

    def default_args(self) -> Any:
        return self.element.default_args()

    def __repr__(self) -> str:
        return f"Array({self.element!r}, {self.length})"


class Tuple(BinType):
    """异构元组, 解码为 `tuple`.

    每个位置的类型都必须接受空参数, 最多 `MAX_TUPLE_ARITY` 个位置.
    """

    __slots__ = ("elements",)

    def __init__(self, *elements: Any) -> None:
        if len(elements) > MAX_TUPLE_ARITY:
            raise TypeError(
                f"Tuple supports at most {MAX_TUPLE_ARITY} positions, got {len(elements)}"
            )
        for index, element in enumerate(elements):
            try:
                default = element.default_args()
            except MissingArgumentError as e:
                raise TypeError(
                    f"Tuple position {index} ({element!r}) does not accept empty args"
                ) from e
            if default != NO_ARGS:
                raise TypeError(
                    f"Tuple position {index} ({element!r}) does not accept empty args"
                )
        self.elements = elements

    def read_options(
        self, reader: Stream, options: ReadOptions, args: Any
    ) -> tuple[Any, ...]:
        return tuple(
            element.read_options(reader, options, NO_ARGS) for element in self.elements
        )

    def after_parse(
        self, value: tuple[Any, ...], reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        for element, item in zip(self.elements, value, strict=True):
            element.after_parse(item, reader, options, NO_ARGS)

    def __repr__(self) -> str:
        return f"Tuple({', '.join(repr(e) for e in self.elements)})"


class Option(BinType):
    """可选值.

    这一层总是解码出存在的值; 是否缺省由上层的条件字段逻辑决定.
    """

    __slots__ = ("element",)

    def __init__(self, element: Any) -> None:
        self.element = element

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> Any:
        return self.element.read_options(reader, options, args)

    def after_parse(
        self, value: Any, reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        if value is not None:
            self.element.after_parse(value, reader, options, args)

    def default_args(self) -> Any:
        return self.element.default_args()

    def __repr__(self) -> str:
        return f"Option({self.element!r})"


class Box(BinType):
    """单一所有者的间接值.

    Python 引用本身就是间接层, 解码结果即被包装的值.
    """

    __slots__ = ("element",)

    def __init__(self, element: Any) -> None:
        self.element = element

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> Any:
        return self.element.read_options(reader, options, args)

    def after_parse(
        self, value: Any, reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        self.element.after_parse(value, reader, options, args)

    def default_args(self) -> Any:
        return self.element.default_args()

    def __repr__(self) -> str:
        return f"Box({self.element!r})"
