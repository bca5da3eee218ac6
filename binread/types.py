"""基础可读取类型.

本模块定义了定长数值类型 (`U8` ... `I128`, `F32`, `F64`)、
单字节字符类型 `Char`、零字节的 `Unit` 与 `Phantom` 标记类型.
"""

import struct
from typing import Any

from .config import ReadOptions
from .core import NO_ARGS, BinType
from .reader import Stream, read_exact


class IntType(BinType):
    """定长整数类型.

    读取 `size` 字节, 按解析后的字节序解释. 数据不足时恢复流位置.
    """

    __slots__ = ("name", "signed", "size")

    def __init__(self, name: str, size: int, signed: bool) -> None:
        self.name = name
        self.size = size
        self.signed = signed

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> int:
        data = read_exact(reader, self.size)
        return int.from_bytes(data, options.endian.byteorder, signed=self.signed)

    @property
    def min_value(self) -> int:
        """可表示的最小值."""
        return -(1 << (self.size * 8 - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        """可表示的最大值."""
        bits = self.size * 8 - 1 if self.signed else self.size * 8
        return (1 << bits) - 1

    def __repr__(self) -> str:
        return self.name


class FloatType(BinType):
    """IEEE 754 浮点类型."""

    __slots__ = ("_big", "_little", "name", "size")

    def __init__(self, name: str, fmt: str) -> None:
        self.name = name
        # 预编译的结构体解包器
        self._big = struct.Struct(">" + fmt)
        self._little = struct.Struct("<" + fmt)
        self.size = self._big.size

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> float:
        data = read_exact(reader, self.size)
        unpacker = self._little if options.is_little_endian else self._big
        return float(unpacker.unpack(data)[0])

    def __repr__(self) -> str:
        return self.name


U8 = IntType("U8", 1, signed=False)
U16 = IntType("U16", 2, signed=False)
U32 = IntType("U32", 4, signed=False)
U64 = IntType("U64", 8, signed=False)
U128 = IntType("U128", 16, signed=False)

I8 = IntType("I8", 1, signed=True)
I16 = IntType("I16", 2, signed=True)
I32 = IntType("I32", 4, signed=True)
I64 = IntType("I64", 8, signed=True)
I128 = IntType("I128", 16, signed=True)

F32 = FloatType("F32", "f")
F64 = FloatType("F64", "d")

INTEGER_TYPES = (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)
FLOAT_TYPES = (F32, F64)


class CharType(BinType):
    """字符类型 (单字节).

    读取一个字节并直接扩展为同值的码点, 不做任何多字节文本解码:
    `b"\\xe4"` 解码为 `"ä"` 而不是 UTF-8 序列的一部分.
    """

    __slots__ = ()

    def read_options(self, reader: Stream, options: ReadOptions, args: Any) -> str:
        return chr(U8.read_options(reader, options, NO_ARGS))

    def __repr__(self) -> str:
        return "Char"


Char = CharType()


class UnitType(BinType):
    """空值类型, 不消耗任何字节, 解码为 `()`."""

    __slots__ = ()

    def read_options(
        self, reader: Stream, options: ReadOptions, args: Any
    ) -> tuple[()]:
        return ()

    def __repr__(self) -> str:
        return "Unit"


Unit = UnitType()


class PhantomData:
    """零尺寸标记值, 只携带类型信息."""

    __slots__ = ("type_",)

    def __init__(self, type_: Any) -> None:
        self.type_ = type_

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhantomData):
            return NotImplemented
        return self.type_ is other.type_

    def __hash__(self) -> int:
        return hash((PhantomData, id(self.type_)))

    def __repr__(self) -> str:
        return f"PhantomData({self.type_!r})"


class Phantom(BinType):
    """零尺寸标记类型, 不消耗任何字节."""

    __slots__ = ("type_",)

    def __init__(self, type_: Any) -> None:
        self.type_ = type_

    def read_options(
        self, reader: Stream, options: ReadOptions, args: Any
    ) -> PhantomData:
        return PhantomData(self.type_)

    def __repr__(self) -> str:
        return f"Phantom({self.type_!r})"
