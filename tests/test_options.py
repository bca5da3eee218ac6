"""测试字节序选项与解码配置."""

import dataclasses
import sys

import pytest

from binread import BIG, LITTLE, NATIVE, Endian, ReadOptions


def test_native_resolves_to_host_order() -> None:
    """NATIVE 应解析为主机字节序."""
    expected = Endian.LITTLE if sys.byteorder == "little" else Endian.BIG

    assert Endian.NATIVE.resolve() is expected
    assert Endian.BIG.resolve() is Endian.BIG
    assert Endian.LITTLE.resolve() is Endian.LITTLE


def test_endian_aliases() -> None:
    """模块级别名应指向枚举成员."""
    assert (BIG, LITTLE, NATIVE) == (Endian.BIG, Endian.LITTLE, Endian.NATIVE)


def test_struct_prefix() -> None:
    """struct_prefix 应与解析后的字节序一致."""
    assert Endian.BIG.struct_prefix == ">"
    assert Endian.LITTLE.struct_prefix == "<"
    assert Endian.NATIVE.byteorder == sys.byteorder


def test_read_options_default_is_native() -> None:
    """默认配置应保留未解析的 NATIVE."""
    options = ReadOptions()

    assert options.endian is Endian.NATIVE
    assert options.is_little_endian == (sys.byteorder == "little")


def test_read_options_is_immutable() -> None:
    """配置在解码过程中不可修改."""
    options = ReadOptions()

    with pytest.raises(dataclasses.FrozenInstanceError):
        options.endian = Endian.BIG  # type: ignore[misc]


def test_with_endian_returns_new_options() -> None:
    """with_endian() 应返回新配置, 原配置不变."""
    options = ReadOptions(endian=Endian.LITTLE)

    big = options.with_endian(Endian.BIG)

    assert big.endian is Endian.BIG
    assert options.endian is Endian.LITTLE
    assert options.with_endian(Endian.LITTLE) is options


def test_from_params_accepts_values() -> None:
    """from_params() 应接受枚举或其值."""
    assert ReadOptions.from_params("big").endian is Endian.BIG
    assert ReadOptions.from_params(Endian.LITTLE).endian is Endian.LITTLE
