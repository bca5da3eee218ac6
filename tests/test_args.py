"""测试命名参数与参数构建器."""

from typing import Any

import pytest
from pydantic import BaseModel

from binread import (
    ArgField,
    ArgPolicy,
    ArgumentError,
    MissingArgumentError,
    NamedArgs,
    VecArgs,
    clone_args,
    make_args,
)


class NotClone:
    """没有无参构造函数的类型."""

    def __init__(self, marker: str) -> None:
        self.marker = marker


class BuilderArgs(NamedArgs):
    """包含多种字段的参数类型."""

    blah: int
    not_copy: str
    not_clone: NotClone
    generic: Any


class DefaultsArgs(NamedArgs):
    """各种可选字段."""

    explicit: int = ArgField(5)
    factory: list[int] = ArgField(default_factory=lambda: [1, 2])
    derived: int = ArgField(try_optional=True)
    nested: VecArgs | None = ArgField(None)
    plain_default: str = "x"


class NestedArgs(NamedArgs):
    """嵌套的参数类型."""

    inner_args: DefaultsArgs = ArgField(try_optional=True)


class NoDefaultArgs(NamedArgs):
    """无法推导默认值的可选字段."""

    marker: NotClone = ArgField(try_optional=True)


class LevelConfig(BaseModel):
    """含必填字段的普通 pydantic 模型."""

    level: int


class ConfigArgs(NamedArgs):
    """可选字段的类型需要构造参数."""

    config: LevelConfig = ArgField(try_optional=True)


# --- 构建器测试 ---


def test_builder_with_required_count_only() -> None:
    """只提供 count 时, inner 应为默认的空参数."""
    args = VecArgs.builder().count(3).finalize()

    assert args.count == 3
    assert args.inner == ()


def test_builder_any_order() -> None:
    """字段可以以任意顺序设置."""
    marker = NotClone("m")

    args = (
        BuilderArgs.builder()
        .generic("generic string")
        .not_clone(marker)
        .blah(3)
        .not_copy("a string here")
        .finalize()
    )

    assert args.blah == 3
    assert args.not_copy == "a string here"
    assert args.not_clone is marker
    assert args.generic == "generic string"


def test_builder_missing_required_field() -> None:
    """必填字段未设置时 finalize() 应失败."""
    with pytest.raises(MissingArgumentError, match="count"):
        VecArgs.builder().inner(()).finalize()


def test_builder_set_twice() -> None:
    """同一个字段不能设置两次."""
    builder = VecArgs.builder().count(1)

    with pytest.raises(ArgumentError):
        builder.count(2)


def test_builder_unknown_field() -> None:
    """未声明的字段应被拒绝."""
    builder = VecArgs.builder()

    with pytest.raises(AttributeError):
        builder.size(1)
    with pytest.raises(ArgumentError):
        builder.set(size=1)


def test_builder_set_many() -> None:
    """set() 应支持一次设置多个字段."""
    builder = VecArgs.builder().set(count=2, inner=("x",))

    assert builder.is_set("count")
    assert builder.finalize() == VecArgs(count=2, inner=("x",))


def test_builder_validation_error() -> None:
    """字段值未通过校验时应抛出 ArgumentError."""
    with pytest.raises(ArgumentError):
        VecArgs.builder().count(-1).finalize()


def test_builder_defaults() -> None:
    """未设置的可选字段应按声明或类型推导默认值."""
    args = DefaultsArgs.builder().finalize()

    assert args.explicit == 5
    assert args.factory == [1, 2]
    assert args.derived == 0
    assert args.nested is None
    assert args.plain_default == "x"


def test_builder_nested_defaults() -> None:
    """NamedArgs 类型的可选字段应由其自身的构建器生成默认值."""
    args = NestedArgs.builder().finalize()

    assert args.inner_args == DefaultsArgs.builder().finalize()


def test_builder_no_derivable_default() -> None:
    """无法推导默认值的可选字段未设置时应失败."""
    with pytest.raises(MissingArgumentError):
        NoDefaultArgs.builder().finalize()

    marker = NotClone("m")
    assert NoDefaultArgs.builder().marker(marker).finalize().marker is marker


def test_builder_model_without_default() -> None:
    """必填字段的 pydantic 模型无法推导默认值, 应抛出 MissingArgumentError."""
    with pytest.raises(MissingArgumentError):
        ConfigArgs.builder().finalize()

    config = LevelConfig(level=3)
    assert ConfigArgs.builder().config(config).finalize().config == config


def test_arg_policies() -> None:
    """字段策略应正确反映声明."""
    assert VecArgs.arg_policies() == {
        "count": ArgPolicy.REQUIRED,
        "inner": ArgPolicy.TRY_OPTIONAL,
    }
    assert DefaultsArgs.arg_policies()["plain_default"] is ArgPolicy.TRY_OPTIONAL


# --- 复制与运行时创建测试 ---


def test_clone_args() -> None:
    """clone_args() 应复制参数而不丢失信息."""
    args = VecArgs(count=2, inner=VecArgs(count=1))

    cloned = clone_args(args)

    assert cloned == args
    assert cloned is not args
    assert clone_args(()) == ()

    mutable = [1, 2]
    copied = clone_args(mutable)
    assert copied == mutable
    assert copied is not mutable


def test_args_are_immutable() -> None:
    """参数值不可变."""
    args = VecArgs(count=2)

    with pytest.raises(ValueError):
        args.count = 3


def test_make_args() -> None:
    """make_args() 应创建可用于构建器的参数类型."""
    ElementArgs = make_args(
        "ElementArgs", size=int, scale=(int, ArgField(1, ge=1))
    )

    args = ElementArgs.builder().size(4).finalize()

    assert args.size == 4
    assert args.scale == 1
    with pytest.raises(MissingArgumentError):
        ElementArgs.builder().finalize()
