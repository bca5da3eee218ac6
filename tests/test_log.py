"""测试 binread 日志模块."""

import logging
from io import BytesIO

from binread.log import get_hexdump, logger, stream_hexdump


def test_logger_config() -> None:
    """验证 Logger 默认配置不包含 Handler 且名称正确."""
    assert logger.name == "binread"
    assert not logger.handlers
    assert logger.level == logging.NOTSET


def test_get_hexdump_basic() -> None:
    """get_hexdump() 应正确格式化十六进制数据."""
    data = b"\x01\x02\x03"
    dump = get_hexdump(data, pos=1, window=1)

    assert "01 02" in dump.lower()


def test_get_hexdump_boundaries() -> None:
    """get_hexdump() 应正确处理数据起始和结束边界."""
    data = b"\xaa\xbb\xcc"

    dump_start = get_hexdump(data, pos=0, window=1)
    assert "aa" in dump_start.lower()

    dump_end = get_hexdump(data, pos=2, window=1)
    assert "bb cc" in dump_end.lower()


def test_get_hexdump_empty() -> None:
    """get_hexdump() 应能处理空字节输入而不报错."""
    dump = get_hexdump(b"", pos=0)
    assert dump
    assert "位置" in dump


def test_stream_hexdump_keeps_position() -> None:
    """stream_hexdump() 不应改变流位置."""
    stream = BytesIO(b"\x10\x20\x30\x40")
    stream.seek(3)

    dump = stream_hexdump(stream, pos=2, window=2)

    assert "10 20 30 40" in dump
    assert stream.tell() == 3


def test_stream_hexdump_uses_absolute_offsets() -> None:
    """stream_hexdump() 显示的位置和范围应为流中的绝对偏移."""
    stream = BytesIO(bytes(range(120)))

    dump = stream_hexdump(stream, pos=100, window=16)

    assert dump.startswith("位置 100 的上下文 (显示 84-116)")
    assert "54 55" in dump
