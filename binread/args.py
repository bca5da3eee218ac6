"""命名参数模型与类型化参数构建器.

复合类型需要的参数 (如元素个数、子元素参数) 用 `NamedArgs` 子类声明,
每个字段有一个策略:

    - `REQUIRED`: 调用方必须提供.
    - `TRY_OPTIONAL`: 可以省略, 构建时尝试推导默认值, 推导失败才报错.

构建器让调用方以任意顺序逐字段提供参数, 在 `finalize()` 时统一校验:
    >>> args = VecArgs.builder().count(3).finalize()
    >>> args.inner
    ()
"""

from enum import Enum
from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined
from typing_extensions import Self

from .exceptions import ArgumentError, MissingArgumentError
from .log import logger

A = TypeVar("A", bound="NamedArgs")

_POLICY_KEY = "arg_policy"


class ArgPolicy(str, Enum):
    """参数字段策略."""

    REQUIRED = "required"
    TRY_OPTIONAL = "try_optional"


def ArgField(
    default: Any = PydanticUndefined,
    *,
    default_factory: Any | None = None,
    try_optional: bool = False,
    **kwargs: Any,
) -> Any:
    """创建命名参数字段配置.

    这是 Pydantic `Field` 的包装函数, 把字段策略写入 `json_schema_extra`.

    Args:
        default: 静态默认值. 提供时字段自动成为 `TRY_OPTIONAL`.
        default_factory: 生成默认值的无参可调用对象.
        try_optional: 未提供默认值时, 是否允许构建器从类型注解推导默认值.
        **kwargs: 透传给 Pydantic `Field` 的约束 (如 `ge=0`).

    Returns:
        Any: 包含策略元数据的 Pydantic FieldInfo 对象.

    Examples:
        >>> class ElementArgs(NamedArgs):
        ...     count: int = ArgField(ge=0)
        ...     inner: Any = ArgField((), try_optional=True)
    """
    optional = (
        try_optional or default is not PydanticUndefined or default_factory is not None
    )
    policy = ArgPolicy.TRY_OPTIONAL if optional else ArgPolicy.REQUIRED

    field_kwargs: dict[str, Any] = {
        "json_schema_extra": {_POLICY_KEY: policy.value},
        **kwargs,
    }
    if default is not PydanticUndefined:
        field_kwargs["default"] = default
    if default_factory is not None:
        field_kwargs["default_factory"] = default_factory

    return cast(Any, Field)(**field_kwargs)


def field_policy(field_info: FieldInfo) -> ArgPolicy:
    """获取字段策略.

    未使用 `ArgField` 声明的字段: 有默认值则为 `TRY_OPTIONAL`, 否则为 `REQUIRED`.
    """
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and _POLICY_KEY in extra:
        return ArgPolicy(extra[_POLICY_KEY])
    if field_info.is_required():
        return ArgPolicy.REQUIRED
    return ArgPolicy.TRY_OPTIONAL


class NamedArgs(BaseModel):
    """命名参数基类.

    参数值不可变, `clone()` 返回浅复制, 集合类型对每个元素复制一次参数.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    @classmethod
    def builder(cls) -> "ArgsBuilder[Self]":
        """创建该参数类型的构建器."""
        return ArgsBuilder(cls)

    @classmethod
    def arg_policies(cls) -> dict[str, ArgPolicy]:
        """返回每个字段的策略."""
        return {name: field_policy(info) for name, info in cls.model_fields.items()}

    def clone(self) -> Self:
        """复制参数值."""
        return self.model_copy()


class ArgsBuilder(Generic[A]):
    """分阶段的参数构建器.

    字段设置方法以字段名命名, 返回构建器本身以便链式调用:
        >>> builder = VecArgs.builder()
        >>> builder.inner(()).count(2).finalize()
        VecArgs(count=2, inner=())

    与构建器方法重名的字段可以用 `set()` 设置.
    """

    __slots__ = ("_args_cls", "_values")

    def __init__(self, args_cls: type[A]) -> None:
        """初始化构建器.

        Args:
            args_cls: 目标参数类型 (`NamedArgs` 子类).
        """
        self._args_cls = args_cls
        self._values: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._args_cls.model_fields:
            raise AttributeError(
                f"{self._args_cls.__name__} has no argument field {name!r}"
            )

        def setter(value: Any) -> "ArgsBuilder[A]":
            return self._set(name, value)

        setter.__name__ = name
        return setter

    def set(self, **values: Any) -> "ArgsBuilder[A]":
        """一次设置多个字段."""
        for name, value in values.items():
            self._set(name, value)
        return self

    def is_set(self, name: str) -> bool:
        """字段是否已被显式设置."""
        return name in self._values

    def _set(self, name: str, value: Any) -> "ArgsBuilder[A]":
        if name not in self._args_cls.model_fields:
            raise ArgumentError(
                f"{self._args_cls.__name__} has no argument field {name!r}"
            )
        if name in self._values:
            raise ArgumentError(f"Argument {name!r} is already set")
        self._values[name] = value
        return self

    def finalize(self) -> A:
        """校验完整性并生成参数值.

        Raises:
            MissingArgumentError: 必填字段未设置, 或可选字段无法推导默认值.
            ArgumentError: 字段值未通过校验.
        """
        cls = self._args_cls
        values = dict(self._values)

        for name, info in cls.model_fields.items():
            if name in values:
                continue
            if field_policy(info) is ArgPolicy.REQUIRED:
                raise MissingArgumentError(
                    f"Required argument {name!r} of {cls.__name__} is not set"
                )
            values[name] = _default_for(cls, name, info)

        try:
            return cls(**values)
        except ValidationError as e:
            raise ArgumentError(f"Invalid arguments for {cls.__name__}: {e}") from e

    def __repr__(self) -> str:
        return f"ArgsBuilder({self._args_cls.__name__}, {self._values!r})"


def _default_for(cls: type[NamedArgs], name: str, info: FieldInfo) -> Any:
    if not info.is_required():
        return info.get_default(call_default_factory=True)

    annotation = info.annotation
    if isinstance(annotation, type) and issubclass(annotation, NamedArgs):
        try:
            return annotation.builder().finalize()
        except MissingArgumentError as e:
            raise MissingArgumentError(
                f"Argument {name!r} of {cls.__name__} has no default: {e}"
            ) from e

    if annotation is tuple or annotation == tuple[()]:
        return ()

    if callable(annotation):
        try:
            return annotation()
        except (TypeError, ValueError):
            # 需要构造参数的类型 (含必填字段的 pydantic 模型) 无法推导默认值
            pass

    logger.debug("[ArgsBuilder] %s.%s 无法推导默认值", cls.__name__, name)
    raise MissingArgumentError(
        f"Argument {name!r} of {cls.__name__} is not set and has no default"
    )


def make_args(name: str, **fields: Any) -> type[NamedArgs]:
    """在运行时创建命名参数类型.

    Args:
        name: 参数类型名称.
        **fields: 字段定义, 形如 `count=(int, ArgField(ge=0))` 或 `count=int`.

    Returns:
        type[NamedArgs]: 新的参数类型.
    """
    definitions: dict[str, Any] = {}
    for field_name, spec in fields.items():
        if isinstance(spec, tuple):
            definitions[field_name] = spec
        else:
            definitions[field_name] = (spec, ArgField())
    return cast(type[NamedArgs], create_model(name, __base__=NamedArgs, **definitions))
