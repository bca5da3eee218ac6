"""测试解码入口."""

import logging
import sys
from io import BytesIO

import pytest

from binread import (
    U8,
    U16,
    U32,
    BinReader,
    BinReadIoError,
    Endian,
    MissingArgumentError,
    NotEnoughBytesError,
    Readable,
    ReadOptions,
    Vec,
    VecArgs,
    load,
    loads,
    read,
    read_args,
    read_be_args,
    read_le_args,
    read_ne_args,
    read_type,
)

# --- 函数入口测试 ---


def test_read_uses_native_order() -> None:
    """read() 应使用默认参数和主机字节序."""
    data = (258).to_bytes(2, sys.byteorder)

    assert read(U16, BytesIO(data)) == 258
    assert U16.read(BytesIO(data)) == 258


def test_read_args_uses_native_order() -> None:
    """read_args() 应使用给定参数和主机字节序."""
    data = (1).to_bytes(2, sys.byteorder) + (2).to_bytes(2, sys.byteorder)

    assert read_args(Vec(U16), BytesIO(data), VecArgs(count=2)) == [1, 2]
    assert Vec(U16).read_args(BytesIO(data), VecArgs(count=2)) == [1, 2]


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        (read_be_args, [0x0102, 0x0304]),
        (read_le_args, [0x0201, 0x0403]),
    ],
)
def test_read_args_entry_points(entry, expected) -> None:
    """带参数的入口应使用对应字节序."""
    stream = BytesIO(b"\x01\x02\x03\x04")

    assert entry(stream, Vec(U16), VecArgs(count=2)) == expected


def test_read_ne_args() -> None:
    """read_ne_args() 应等价于按解析后的主机字节序读取."""
    data = b"\x01\x02"
    native = Endian.NATIVE.resolve()

    result = read_ne_args(BytesIO(data), Vec(U16), VecArgs(count=1))

    assert result == [int.from_bytes(data, native.value)]


def test_default_args_required() -> None:
    """没有默认参数的类型不能使用无参入口."""
    with pytest.raises(MissingArgumentError):
        read_type(BytesIO(b"\x00"), Vec(U8), Endian.BIG)


# --- loads / load 测试 ---


def test_loads() -> None:
    """loads() 应从字节数据解码并忽略多余字节."""
    assert loads(b"\x07\x00\x00\x00\xff", U32, endian=Endian.LITTLE) == 7
    assert loads(bytearray(b"\x00\x07"), U16, endian=Endian.BIG) == 7
    assert loads(b"\x01\x02", Vec(U8), args=VecArgs(count=2)) == [1, 2]


def test_load_does_not_close_stream() -> None:
    """load() 不应关闭调用方的流."""
    stream = BytesIO(b"\x00\x05")

    assert load(stream, U16, endian=Endian.BIG) == 5
    assert not stream.closed
    assert stream.tell() == 2


def test_loads_short_read() -> None:
    """loads() 数据不足时应抛出 NotEnoughBytesError."""
    with pytest.raises(NotEnoughBytesError):
        loads(b"\x00", U16)


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """解码失败时应记录带十六进制上下文的调试日志."""
    with caplog.at_level(logging.DEBUG, logger="binread"):
        with pytest.raises(NotEnoughBytesError):
            loads(b"\x01\x02\x03", U32, endian=Endian.LITTLE)

    assert "01 02 03" in caplog.text


# --- BinReader 测试 ---


def test_bin_reader_methods() -> None:
    """BinReader 应以方法形式提供解码入口."""
    reader = BinReader(b"\x07\x00\x00\x00\xcc\x00\x00\x05")

    x = reader.read_le(U32)
    y = reader.read_type(U16, Endian.LITTLE)
    z = reader.read_be(U16)

    assert (x, y, z) == (7, 0xCC, 5)
    assert reader.tell() == 8


def test_bin_reader_args_methods() -> None:
    """BinReader 的带参数方法应使用对应字节序."""
    reader = BinReader(BytesIO(b"\x00\x01\x01\x00\x02\x00"))

    assert reader.read_be_args(Vec(U16), VecArgs(count=1)) == [1]
    assert reader.read_le_args(Vec(U16), VecArgs(count=1)) == [1]
    assert reader.read_type_args(Vec(U8), Endian.BIG, VecArgs(count=1)) == [2]
    assert reader.read_ne(U8) == 0


def test_bin_reader_is_a_stream() -> None:
    """BinReader 本身满足字节流能力."""
    reader = BinReader(b"\x01\x02\x03")

    assert U8.read_options(reader, ReadOptions(), ()) == 1
    reader.seek(0)
    assert reader.read(2) == b"\x01\x02"


class _BrokenStream(BytesIO):
    def read(self, size: int = -1, /) -> bytes:
        raise OSError("device gone")


def test_stream_os_error_is_wrapped() -> None:
    """底层流的 OSError 应被包装为 BinReadIoError."""
    stream = _BrokenStream(b"\x00\x00")

    with pytest.raises(BinReadIoError) as exc_info:
        read_type(stream, U16, Endian.BIG)

    assert not isinstance(exc_info.value, NotEnoughBytesError)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_non_readable_target() -> None:
    """非可读取类型应抛出 TypeError."""
    with pytest.raises(TypeError):
        loads(b"\x00", int)


def test_bin_reader_wraps_stream() -> None:
    """BinReader 应直接使用调用方的流, 字节数据包装为 BytesIO."""
    stream = BytesIO(b"\x01")

    assert BinReader(stream).stream is stream
    assert isinstance(BinReader(b"\x01").stream, BytesIO)


def test_builtin_types_are_readable() -> None:
    """内置类型满足 Readable 协议."""
    assert isinstance(U32, Readable)
    assert isinstance(Vec(U8), Readable)
    assert not isinstance(int, Readable)
