"""字节流能力的底层辅助函数.

引擎只通过三个操作与流交互: `read(n)`, `seek(offset)`, `tell()`.
该模块把流抛出的 `OSError` 统一包装为 `BinReadIoError`.
"""

import contextlib
from collections.abc import Iterator
from typing import Any, Protocol

from .exceptions import BinReadIoError, NotEnoughBytesError


class Stream(Protocol):
    """可定位的二进制输入流."""

    def read(self, size: int = -1, /) -> bytes: ...

    def seek(self, offset: int, whence: int = 0, /) -> int: ...

    def tell(self) -> int: ...


def stream_position(reader: Stream) -> int:
    """返回当前流位置."""
    try:
        return reader.tell()
    except OSError as e:
        raise BinReadIoError(f"Cannot query stream position: {e}") from e


def seek_to(reader: Stream, pos: int) -> None:
    """定位到绝对偏移."""
    try:
        reader.seek(pos)
    except (OSError, ValueError) as e:
        raise BinReadIoError(f"Cannot seek to {pos}: {e}", pos) from e


def read_exact(reader: Stream, size: int) -> bytes:
    """精确读取 `size` 字节.

    数据不足时先把流恢复到读取前的位置, 再抛出异常,
    调用方观察不到部分消耗.

    Raises:
        NotEnoughBytesError: 流中剩余数据不足 `size` 字节.
        BinReadIoError: 底层流读取失败.
    """
    pos = stream_position(reader)
    try:
        data = _read_all(reader, size)
    except OSError as e:
        seek_to(reader, pos)
        raise BinReadIoError(f"Read of {size} bytes failed: {e}", pos) from e

    if len(data) != size:
        seek_to(reader, pos)
        raise NotEnoughBytesError(
            f"Not enough bytes in reader: needed {size}, got {len(data)}", pos
        )
    return data


def read_up_to(reader: Stream, size: int) -> bytes:
    """读取至多 `size` 字节, 不恢复位置."""
    try:
        return _read_all(reader, size)
    except OSError as e:
        raise BinReadIoError(f"Read of {size} bytes failed: {e}") from e


def _read_all(reader: Stream, size: int) -> bytes:
    # 原始流 (如 socket 文件) 允许短读, 循环直到 EOF
    data = reader.read(size)
    if data is None:
        data = b""
    if len(data) >= size or not data:
        return bytes(data)

    chunks = [data]
    remaining = size - len(data)
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


@contextlib.contextmanager
def seeking(reader: Stream, pos: int) -> Iterator[Any]:
    """临时定位到 `pos`, 退出时恢复原位置."""
    saved = stream_position(reader)
    seek_to(reader, pos)
    try:
        yield reader
    finally:
        seek_to(reader, saved)
