"""esfluent 配置数据模型模块."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BuilderConfig:
    """构建器配置.

    在入口函数或任意构建器上传入，并自动传递给所有嵌套作用域。

    Attributes:
        strict_options: 是否严格校验查询参数。为 True 时未知参数抛出
            UnsupportedOptionError；为 False 时记录警告并原样传递给 ES。
        validate_values: 是否校验叶子查询的字段值类型

    Examples:
        >>> config = BuilderConfig(strict_options=False)
        >>> config.validate_values
        True
    """

    strict_options: bool = True
    validate_values: bool = True

    def __post_init__(self) -> None:
        """校验配置项类型."""
        if not isinstance(self.strict_options, bool):
            raise TypeError(
                f"strict_options 必须是布尔值，当前值: {self.strict_options!r}"
            )
        if not isinstance(self.validate_values, bool):
            raise TypeError(
                f"validate_values 必须是布尔值，当前值: {self.validate_values!r}"
            )


# 未显式传入配置时使用
DEFAULT_CONFIG = BuilderConfig()
