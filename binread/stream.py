"""流式读取模块.

`BinReader` 包装调用方提供的可定位流, 以方法形式提供解码入口:
    >>> reader = BinReader(b"\\x07\\x00\\x00\\x00\\xcc\\x00\\x00\\x05")
    >>> reader.read_le(U32), reader.read_type(U16, Endian.LITTLE), reader.read_be(U16)
    (7, 204, 5)

流的生命周期由调用方负责, `BinReader` 不会关闭它.
"""

import io
from typing import IO, Any

from . import api
from .core import Readable
from .options import Endian
from .reader import Stream


class BinReader:
    """可定位流的解码包装器.

    同时满足字节流能力 (`read`, `seek`, `tell`), 因此可以直接传给
    任何可读取类型的 `read_options()`.
    """

    __slots__ = ("_stream",)

    def __init__(self, source: bytes | bytearray | memoryview | IO[bytes] | Stream):
        """初始化读取器.

        Args:
            source: 字节数据 (包装为 `io.BytesIO`) 或可定位的二进制流.
        """
        if isinstance(source, bytes | bytearray | memoryview):
            source = io.BytesIO(bytes(source))
        self._stream = source

    @property
    def stream(self) -> Any:
        """被包装的底层流."""
        return self._stream

    # --- 字节流能力 ---

    def read(self, size: int = -1, /) -> bytes:
        """读取至多 `size` 字节."""
        return self._stream.read(size)

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """定位流."""
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        """返回当前流位置."""
        return self._stream.tell()

    # --- 解码入口 ---

    def read_type(self, target: Readable, endian: Endian) -> Any:
        """按给定字节序读取 `target`."""
        return api.read_type(self, target, endian)

    def read_be(self, target: Readable) -> Any:
        """按大端字节序读取 `target`."""
        return api.read_be(self, target)

    def read_le(self, target: Readable) -> Any:
        """按小端字节序读取 `target`."""
        return api.read_le(self, target)

    def read_ne(self, target: Readable) -> Any:
        """按主机字节序读取 `target`."""
        return api.read_ne(self, target)

    def read_type_args(self, target: Readable, endian: Endian, args: Any) -> Any:
        """按给定字节序和参数读取 `target`."""
        return api.read_type_args(self, target, endian, args)

    def read_be_args(self, target: Readable, args: Any) -> Any:
        """按大端字节序和给定参数读取 `target`."""
        return api.read_be_args(self, target, args)

    def read_le_args(self, target: Readable, args: Any) -> Any:
        """按小端字节序和给定参数读取 `target`."""
        return api.read_le_args(self, target, args)

    def read_ne_args(self, target: Readable, args: Any) -> Any:
        """按主机字节序和给定参数读取 `target`."""
        return api.read_ne_args(self, target, args)
