"""文件偏移指针类型.

`FilePtr` 在第一阶段只读取偏移量, 在第二阶段跳转到该偏移解码目标值,
然后回到跳转前的位置. 这使得结构体可以引用流中后面才出现的数据.
"""

from typing import Any

from .config import ReadOptions
from .core import BinType, parse
from .log import logger
from .reader import Stream, seeking
from .types import U32


class FilePtrValue:
    """`FilePtr` 的解码结果.

    Attributes:
        ptr: 第一阶段读取的偏移量.
        value: 第二阶段解码出的目标值, 第二阶段之前为 `None`.
    """

    __slots__ = ("ptr", "value")

    def __init__(self, ptr: int, value: Any = None) -> None:
        self.ptr = ptr
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilePtrValue):
            return NotImplemented
        return self.ptr == other.ptr and self.value == other.value

    def __repr__(self) -> str:
        return f"FilePtrValue(ptr={self.ptr}, value={self.value!r})"


class FilePtr(BinType):
    """指向流中绝对偏移的指针.

    Args:
        ptr_type: 偏移量的整数类型 (默认 `U32`).
        target: 偏移处数据的类型.

    Examples:
        >>> ptr = FilePtr(U8, U16)
        >>> value = ptr.read(BytesIO(b"\\x01\\x00\\x07"))
        >>> value.value
        7
    """

    __slots__ = ("ptr_type", "target")

    def __init__(self, ptr_type: Any = U32, target: Any = None) -> None:
        if target is None:
            raise TypeError("FilePtr requires a target type")
        self.ptr_type = ptr_type
        self.target = target

    def read_options(
        self, reader: Stream, options: ReadOptions, args: Any
    ) -> FilePtrValue:
        ptr = self.ptr_type.read_options(reader, options, ())
        return FilePtrValue(ptr)

    def after_parse(
        self, value: FilePtrValue, reader: Stream, options: ReadOptions, args: Any
    ) -> None:
        logger.debug("[FilePtr] 跳转到偏移 0x%X 解码 %r", value.ptr, self.target)
        with seeking(reader, value.ptr):
            value.value = parse(self.target, reader, options, args)

    def default_args(self) -> Any:
        return self.target.default_args()

    def __repr__(self) -> str:
        return f"FilePtr({self.ptr_type!r}, {self.target!r})"
