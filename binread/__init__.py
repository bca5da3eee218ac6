"""可组合的二进制反序列化引擎.

提供可读取类型契约 (`BinRead`, `BinType`)、参数构建器 (`NamedArgs`)、
内置类型以及一次性解码入口 (`read_le`, `loads` 等).
"""

from .api import (
    load,
    loads,
    read,
    read_args,
    read_be,
    read_be_args,
    read_le,
    read_le_args,
    read_ne,
    read_ne_args,
    read_type,
    read_type_args,
)
from .args import ArgField, ArgPolicy, ArgsBuilder, NamedArgs, make_args
from .config import ReadOptions
from .containers import MAX_TUPLE_ARITY, Array, Box, Option, Tuple, Vec, VecArgs
from .core import NO_ARGS, BinRead, BinType, Readable, clone_args
from .exceptions import (
    ArgumentError,
    AssertFailError,
    BadMagicError,
    BinReadError,
    BinReadIoError,
    CustomError,
    MissingArgumentError,
    NotEnoughBytesError,
    NoVariantMatchError,
)
from .file_ptr import FilePtr, FilePtrValue
from .options import BIG, LITTLE, NATIVE, Endian
from .stream import BinReader
from .struct import BinField, BinStruct, ReadContext
from .types import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Char,
    Phantom,
    PhantomData,
    Unit,
)

__version__ = "0.1.0"

__all__ = [
    "BIG",
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "LITTLE",
    "MAX_TUPLE_ARITY",
    "NATIVE",
    "NO_ARGS",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "ArgField",
    "ArgPolicy",
    "ArgsBuilder",
    "ArgumentError",
    "Array",
    "AssertFailError",
    "BadMagicError",
    "BinField",
    "BinRead",
    "BinReadError",
    "BinReadIoError",
    "BinReader",
    "BinStruct",
    "BinType",
    "Box",
    "Char",
    "CustomError",
    "Endian",
    "FilePtr",
    "FilePtrValue",
    "MissingArgumentError",
    "NamedArgs",
    "NoVariantMatchError",
    "NotEnoughBytesError",
    "Option",
    "Phantom",
    "PhantomData",
    "ReadContext",
    "ReadOptions",
    "Readable",
    "Tuple",
    "Unit",
    "Vec",
    "VecArgs",
    "__version__",
    "clone_args",
    "load",
    "loads",
    "make_args",
    "read",
    "read_args",
    "read_be",
    "read_be_args",
    "read_le",
    "read_le_args",
    "read_ne",
    "read_ne_args",
    "read_type",
    "read_type_args",
]
