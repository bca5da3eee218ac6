"""binread 日志记录器."""

import binascii
import logging
from typing import Any

logger = logging.getLogger("binread")


def get_hexdump(
    data: bytes | bytearray | memoryview, pos: int, window: int = 16, base: int = 0
) -> str:
    """获取指定位置周围数据的十六进制转储.

    `base` 是 `data` 首字节在流中的偏移, 显示的位置均为流中的绝对偏移.
    """
    rel = pos - base
    start = max(0, rel - window)
    end = min(len(data), rel + window)
    chunk = bytes(data[start:end])

    hex_str = binascii.hexlify(chunk).decode("ascii")
    # 每2个字符插入空格
    hex_str = " ".join(hex_str[i : i + 2] for i in range(0, len(hex_str), 2))

    return f"位置 {pos} 的上下文 (显示 {base + start}-{base + end}):\n{hex_str}"


def stream_hexdump(reader: Any, pos: int, window: int = 16) -> str:
    """获取流中指定位置周围数据的十六进制转储, 不改变流位置."""
    saved = reader.tell()
    start = max(0, pos - window)
    try:
        reader.seek(start)
        chunk = reader.read(pos - start + window)
    finally:
        reader.seek(saved)
    return get_hexdump(chunk, pos, window, base=start)
