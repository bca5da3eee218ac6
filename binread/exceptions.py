"""binread 异常类.

该模块定义了解码引擎的异常层次结构.
I/O 来源的错误 (`BinReadIoError`) 由引擎本身抛出,
语义错误 (魔数、断言、变体) 只由结构体等上层实现抛出.
"""

from typing import Any


class BinReadError(Exception):
    """所有 binread 异常的基类."""

    def __init__(self, msg: str, pos: int | None = None) -> None:
        """初始化解码错误.

        Args:
            msg: 错误描述信息.
            pos: 错误发生时的流位置.
        """
        super().__init__(msg)
        self.pos = pos

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.pos is not None:
            return f"{base_msg} (at 0x{self.pos:X})"
        return base_msg


class BinReadIoError(BinReadError):
    """底层流读取或定位失败时抛出."""

    pass


class NotEnoughBytesError(BinReadIoError, EOFError):
    """流在读取到所需字节数之前结束时抛出.

    基础类型在抛出前会把流恢复到读取前的位置;
    复合类型不保证这一点.
    """

    pass


class BadMagicError(BinReadError):
    """魔数不匹配时抛出."""

    def __init__(self, msg: str, pos: int | None = None, found: Any = None) -> None:
        super().__init__(msg, pos)
        self.found = found


class AssertFailError(BinReadError):
    """解码后的断言失败时抛出."""

    pass


class NoVariantMatchError(BinReadError):
    """没有任何变体 (判别值) 匹配时抛出."""

    pass


class CustomError(BinReadError):
    """用户或结构体实现自定义的解码错误."""

    pass


class ArgumentError(BinReadError, ValueError):
    """参数构造或传递错误时抛出.

    Case:
        - 重复设置同一个参数字段.
        - 设置了未声明的字段.
        - 参数值未通过校验.
    """

    pass


class MissingArgumentError(ArgumentError):
    """必填参数未提供, 或可选参数无法推导默认值时抛出."""

    pass
