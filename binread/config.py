"""解码配置对象."""

from dataclasses import dataclass, replace

from .options import Endian


@dataclass(frozen=True)
class ReadOptions:
    """一次解码调用的配置 (不可变).

    在 API 入口层创建, 然后原样传递给整棵解码调用树.
    需要不同字节序的子值必须通过 `with_endian()` 构造新的实例.

    Attributes:
        endian: 多字节数值的字节序.
    """

    endian: Endian = Endian.NATIVE

    @classmethod
    def from_params(cls, endian: Endian | str = Endian.NATIVE) -> "ReadOptions":
        """从参数构建配置对象.

        Args:
            endian: Endian 枚举或其值 ("big", "little", "native").

        Returns:
            ReadOptions: 配置对象.
        """
        return cls(endian=Endian(endian))

    def with_endian(self, endian: Endian) -> "ReadOptions":
        """返回仅字节序不同的新配置."""
        if endian is self.endian:
            return self
        return replace(self, endian=endian)

    @property
    def is_little_endian(self) -> bool:
        """解析后是否为小端字节序."""
        return self.endian.resolve() is Endian.LITTLE
