"""字节序选项.

该模块定义了控制多字节数值解释方式的 `Endian` 枚举.
"""

import sys
from enum import Enum


class Endian(Enum):
    """字节序.

    `NATIVE` 只在真正解释原始字节之前才解析为主机字节序,
    因此它可以安全地保存在 `ReadOptions` 中:
        endian = Endian.NATIVE.resolve()  # Endian.LITTLE (x86)
    """

    # 大端: 最高有效字节在前
    BIG = "big"

    # 小端: 最低有效字节在前
    LITTLE = "little"

    # 主机字节序
    NATIVE = "native"

    def resolve(self) -> "Endian":
        """将 `NATIVE` 解析为 `BIG` 或 `LITTLE`."""
        if self is Endian.NATIVE:
            return Endian.LITTLE if sys.byteorder == "little" else Endian.BIG
        return self

    @property
    def byteorder(self) -> str:
        """`int.from_bytes` 使用的字节序名称."""
        return self.resolve().value

    @property
    def struct_prefix(self) -> str:
        """`struct` 格式字符串使用的字节序前缀."""
        return "<" if self.resolve() is Endian.LITTLE else ">"


BIG = Endian.BIG
LITTLE = Endian.LITTLE
NATIVE = Endian.NATIVE
