"""
esfluent 工具函数模块

提供查询字段、字段值与查询参数的校验函数
"""

import logging
from collections.abc import Iterable
from typing import Any

from esfluent.exceptions import InvalidQueryValueError, UnsupportedOptionError
from esfluent.models import DEFAULT_CONFIG, BuilderConfig

logger = logging.getLogger(__name__)

# 叶子查询允许的字段值类型（bool 是 int 的子类，已包含在内）
FIELD_VALUE_TYPES = (str, int, float)


def run_block(block: Any, builder: Any) -> None:
    """
    在构建器上执行代码块.

    Args:
        block: 接收构建器的可调用对象，返回值被忽略
        builder: 构建器实例

    Raises:
        TypeError: block 不可调用时抛出
    """
    if not callable(block):
        raise TypeError(
            f"block must be callable, got {type(block).__name__}"
        )
    block(builder)


def validate_field_name(field: Any, label: str = "field") -> str:
    """
    校验字段名（或 path、type 等关联键）.

    Args:
        field: 字段名
        label: 报错时使用的名称

    Returns:
        原字段名

    Raises:
        InvalidQueryValueError: 字段名不是字符串或为空白时抛出
    """
    if not isinstance(field, str):
        raise InvalidQueryValueError(
            f"{label} must be a string, got {type(field).__name__}"
        )
    if not field.strip():
        raise InvalidQueryValueError(f"{label} cannot be empty")
    return field


def validate_field_names(fields: Any) -> list[str]:
    """校验字段名列表，返回列表副本."""
    if not isinstance(fields, (list, tuple)):
        raise InvalidQueryValueError(
            f"fields must be a list or tuple of strings, got {type(fields).__name__}"
        )
    return [validate_field_name(f) for f in fields]


def validate_field_value(
    field: str,
    value: Any,
    allowed: tuple[type, ...] = FIELD_VALUE_TYPES,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Any:
    """
    校验叶子查询的字段值类型.

    Args:
        field: 字段名，用于报错信息
        value: 字段值
        allowed: 允许的值类型
        config: 构建器配置，validate_values 为 False 时跳过校验

    Returns:
        原字段值

    Raises:
        InvalidQueryValueError: 值类型不在允许范围内时抛出
    """
    if not config.validate_values:
        return value
    if not isinstance(value, allowed):
        names = ", ".join(t.__name__ for t in allowed)
        raise InvalidQueryValueError(
            f"Invalid value for field '{field}': {value!r} "
            f"(expected one of: {names})"
        )
    return value


def validate_terms_values(
    field: str, values: Any, config: BuilderConfig = DEFAULT_CONFIG
) -> list[Any]:
    """
    校验 terms 查询的值列表.

    字符串本身可迭代，因此单独拒绝，避免被拆成单个字符。

    Args:
        field: 字段名
        values: 值列表（list 或 tuple）
        config: 构建器配置

    Returns:
        值列表的副本

    Raises:
        InvalidQueryValueError: values 不是列表/元组或其中包含无效值时抛出
    """
    if not isinstance(values, (list, tuple)):
        raise InvalidQueryValueError(
            f"Values for terms field '{field}' must be a list or tuple, "
            f"got {type(values).__name__}"
        )
    for value in values:
        validate_field_value(field, value, config=config)
    if not values:
        logger.warning(f"terms 查询的值列表为空，不会匹配任何文档: field={field}")
    return list(values)


def validate_options(
    query_type: str,
    options: dict[str, Any] | None,
    allowed: Iterable[str],
    config: BuilderConfig = DEFAULT_CONFIG,
    reserved: Iterable[str] = (),
) -> dict[str, Any]:
    """
    校验查询参数名.

    Args:
        query_type: 查询类型名，如 "match"
        options: 查询参数，None 视为空
        allowed: 该查询类型允许的参数名
        config: 构建器配置，strict_options 为 False 时未知参数仅记录警告
        reserved: 与查询结构键同名、任何模式下都不能作为参数的名称

    Returns:
        去除值为 None 的参数后的新字典

    Raises:
        UnsupportedOptionError: 参数名为保留名，或严格模式下出现未知参数时抛出
    """
    options = options or {}
    clashes = sorted(k for k in options if k in set(reserved))
    if clashes:
        raise UnsupportedOptionError(
            f"Reserved option(s) for {query_type} query: {', '.join(clashes)}"
        )
    allowed = set(allowed)
    unknown = sorted(k for k in options if k not in allowed)
    if unknown:
        if config.strict_options:
            raise UnsupportedOptionError(
                f"Unsupported option(s) for {query_type} query: {', '.join(unknown)}"
            )
        logger.warning(
            f"{query_type} 查询包含未知参数，将原样传递: {', '.join(unknown)}"
        )
    return {k: v for k, v in options.items() if v is not None}


def validate_score_mode(
    query_type: str, score_mode: Any, allowed: tuple[str, ...]
) -> None:
    """
    校验 score_mode 参数.

    Args:
        query_type: 查询类型名
        score_mode: 评分模式，None 表示使用 ES 默认值
        allowed: 允许的评分模式

    Raises:
        UnsupportedOptionError: 评分模式无效时抛出
    """
    if score_mode is None:
        return
    if score_mode not in allowed:
        raise UnsupportedOptionError(
            f"Invalid score_mode for {query_type} query: {score_mode!r}, "
            f"must be one of {allowed}"
        )
