"""binread API模块.

提供在可定位流上一次性解码的便捷入口:
`read`, `read_args`, `read_type`, `read_be`, `read_le`, `read_ne`,
以及带参数的 `*_args` 版本和面向字节数据的 `loads` / `load`.

所有入口都执行完整的两阶段解码: 先 `read_options`, 再 `after_parse`.
"""

import io
import logging
from typing import IO, Any

from .config import ReadOptions
from .core import Readable, default_args_of, parse
from .exceptions import BinReadError
from .log import logger, stream_hexdump
from .options import Endian
from .reader import Stream, stream_position


def read_type_args(
    reader: Stream, target: Readable, endian: Endian, args: Any
) -> Any:
    """使用给定字节序和参数读取 `target`.

    Args:
        reader: 可定位的二进制流.
        target: 可读取类型 (如 `U32`, `Vec(U8)`, `BinStruct` 子类).
        endian: 字节序.
        args: `target` 的参数.

    Returns:
        Any: 解码出的值.

    Raises:
        NotEnoughBytesError: 流中数据不足.
        BinReadError: 其他解码错误 (原样传递嵌套错误).
    """
    options = ReadOptions.from_params(endian=endian)
    start = stream_position(reader)
    logger.debug("[read] 开始解码 %r (字节序 %s, 位置 %d)", target, endian.value, start)

    try:
        return parse(target, reader, options, args)
    except BinReadError as e:
        if logger.isEnabledFor(logging.DEBUG) and e.pos is not None:
            logger.debug(
                "[read] 解码 %r 失败: %s\n%s", target, e, stream_hexdump(reader, e.pos)
            )
        raise


def read_type(reader: Stream, target: Readable, endian: Endian) -> Any:
    """使用给定字节序和默认参数读取 `target`."""
    return read_type_args(reader, target, endian, default_args_of(target))


def read(target: Readable, reader: Stream) -> Any:
    """使用默认参数和主机字节序读取 `target`."""
    return read_type(reader, target, Endian.NATIVE)


def read_args(target: Readable, reader: Stream, args: Any) -> Any:
    """使用给定参数和主机字节序读取 `target`."""
    return read_type_args(reader, target, Endian.NATIVE, args)


def read_be(reader: Stream, target: Readable) -> Any:
    """按大端字节序读取 `target`."""
    return read_type(reader, target, Endian.BIG)


def read_le(reader: Stream, target: Readable) -> Any:
    """按小端字节序读取 `target`."""
    return read_type(reader, target, Endian.LITTLE)


def read_ne(reader: Stream, target: Readable) -> Any:
    """按主机字节序读取 `target`."""
    return read_type(reader, target, Endian.NATIVE)


def read_be_args(reader: Stream, target: Readable, args: Any) -> Any:
    """按大端字节序和给定参数读取 `target`."""
    return read_type_args(reader, target, Endian.BIG, args)


def read_le_args(reader: Stream, target: Readable, args: Any) -> Any:
    """按小端字节序和给定参数读取 `target`."""
    return read_type_args(reader, target, Endian.LITTLE, args)


def read_ne_args(reader: Stream, target: Readable, args: Any) -> Any:
    """按主机字节序和给定参数读取 `target`."""
    return read_type_args(reader, target, Endian.NATIVE, args)


def loads(
    data: bytes | bytearray | memoryview,
    target: Readable,
    *,
    endian: Endian = Endian.NATIVE,
    args: Any = None,
) -> Any:
    """从字节数据解码 `target`.

    Args:
        data: 输入数据.
        target: 可读取类型.
        endian: 字节序 (默认主机字节序).
        args: `target` 的参数, 省略时使用 `target.default_args()`.

    Returns:
        Any: 解码出的值. 数据末尾未被消耗的字节被忽略.

    Examples:
        >>> loads(b"\\x07\\x00\\x00\\x00", U32, endian=Endian.LITTLE)
        7
    """
    return load(io.BytesIO(bytes(data)), target, endian=endian, args=args)


def load(
    fp: IO[bytes] | Stream,
    target: Readable,
    *,
    endian: Endian = Endian.NATIVE,
    args: Any = None,
) -> Any:
    """从可定位的文件对象解码 `target`.

    文件对象由调用方负责打开和关闭.
    """
    if args is None:
        args = default_args_of(target)
    return read_type_args(fp, target, endian, args)
