"""
查询对象构造模块

将校验后的参数交给 elasticsearch.dsl 的 Q，生成各类型的查询对象。
构建器只负责组合，实际的查询结构与序列化均由 elasticsearch.dsl 完成。

查询统一以字典形式传给 Q，例如 Q({"match": {field: value}})，
字段名与参数名不会和 Python 关键字参数冲突。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from elasticsearch.dsl import Q
from elasticsearch.dsl.query import Query

from esfluent.core.constants import BoolClauses, QueryOptions, ScoreModes
from esfluent.core.utils import (
    validate_field_name,
    validate_field_names,
    validate_field_value,
    validate_options,
    validate_score_mode,
    validate_terms_values,
)
from esfluent.models import DEFAULT_CONFIG, BuilderConfig

logger = logging.getLogger(__name__)


def _field_query(
    query_type: str, field: str, value_key: str, value: Any, options: dict[str, Any]
) -> Query:
    """构建以字段名为键的叶子查询.

    没有参数时使用简写形式 {field: value}，否则使用完整形式
    {field: {value_key: value, **options}}。
    """
    if options:
        body: Any = {value_key: value, **options}
    else:
        body = value
    logger.debug(f"构建 {query_type} 查询: field={field}, value={value!r}")
    return Q({query_type: {field: body}})


def match_query(
    field: str,
    value: Any,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 match 查询.

    Args:
        field: 匹配字段
        value: 查询值（str、int、float 或 bool）
        options: match 查询参数，如 {"operator": "and", "fuzziness": "AUTO"}
        config: 构建器配置

    Returns:
        Match 查询对象

    示例:
        >>> match_query("title", "python").to_dict()
        {'match': {'title': 'python'}}
        >>> match_query("title", "python dsl", {"operator": "and"}).to_dict()
        {'match': {'title': {'query': 'python dsl', 'operator': 'and'}}}
    """
    validate_field_name(field)
    validate_field_value(field, value, config=config)
    options = validate_options(
        "match", options, QueryOptions.MATCH, config, reserved=("query",)
    )
    return _field_query("match", field, "query", value, options)


def term_query(
    field: str,
    value: Any,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 term 精确匹配查询.

    Args:
        field: 匹配字段
        value: 精确值（str、int、float 或 bool）
        options: term 查询参数，如 {"case_insensitive": True}
        config: 构建器配置

    Returns:
        Term 查询对象
    """
    validate_field_name(field)
    validate_field_value(field, value, config=config)
    options = validate_options(
        "term", options, QueryOptions.TERM, config, reserved=("value",)
    )
    return _field_query("term", field, "value", value, options)


def terms_query(
    field: str,
    values: Sequence[Any],
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 terms 多值匹配查询，字段包含任意一个值即匹配.

    terms 的参数与字段同级，因此参数名不能与字段名相同。

    Args:
        field: 匹配字段
        values: 值列表，保持传入顺序
        options: terms 查询参数，如 {"boost": 2.0}
        config: 构建器配置

    Returns:
        Terms 查询对象

    示例:
        >>> terms_query("tags", ["python", "search"], {"boost": 2.0}).to_dict()
        {'terms': {'tags': ['python', 'search'], 'boost': 2.0}}
    """
    validate_field_name(field)
    values = validate_terms_values(field, values, config=config)
    options = validate_options(
        "terms", options, QueryOptions.TERMS, config, reserved=(field,)
    )
    logger.debug(f"构建 terms 查询: field={field}, values={values!r}")
    return Q({"terms": {field: values, **options}})


def wildcard_query(
    field: str,
    value: str,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 wildcard 通配符查询.

    Args:
        field: 匹配字段
        value: 通配符表达式，如 "act*"
        options: wildcard 查询参数，如 {"case_insensitive": True}
        config: 构建器配置

    Returns:
        Wildcard 查询对象
    """
    validate_field_name(field)
    validate_field_value(field, value, allowed=(str,), config=config)
    options = validate_options(
        "wildcard", options, QueryOptions.WILDCARD, config, reserved=("value",)
    )
    return _field_query("wildcard", field, "value", value, options)


def simple_query_string_query(
    query: str,
    fields: Sequence[str] | None = None,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 simple_query_string 查询.

    Args:
        query: 查询字符串
        fields: 查询字段列表，为 None 时使用索引默认字段
        options: simple_query_string 查询参数，如 {"default_operator": "and"}
        config: 构建器配置

    Returns:
        SimpleQueryString 查询对象
    """
    validate_field_value("query", query, allowed=(str,), config=config)
    params: dict[str, Any] = {"query": query}
    if fields is not None:
        params["fields"] = validate_field_names(fields)
    params.update(
        validate_options(
            "simple_query_string",
            options,
            QueryOptions.SIMPLE_QUERY_STRING,
            config,
            reserved=("query", "fields"),
        )
    )
    logger.debug(f"构建 simple_query_string 查询: query={query!r}")
    return Q({"simple_query_string": params})


def match_all_query(
    options: dict[str, Any] | None = None, config: BuilderConfig = DEFAULT_CONFIG
) -> Query:
    """构建 match_all 查询."""
    options = validate_options("match_all", options, QueryOptions.MATCH_ALL, config)
    return Q({"match_all": options})


def bool_query(
    must: Sequence[Query] = (),
    should: Sequence[Query] = (),
    must_not: Sequence[Query] = (),
    filter: Sequence[Query] = (),  # noqa: A002
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 bool 组合查询.

    只输出非空子句；所有子句均为空时得到匹配全部文档的空 bool 查询。

    Args:
        must: 必须匹配且参与评分的查询
        should: 应当匹配的查询
        must_not: 必须不匹配的查询
        filter: 必须匹配但不参与评分的查询
        options: bool 查询参数，如 {"minimum_should_match": 1}
        config: 构建器配置

    Returns:
        Bool 查询对象
    """
    options = validate_bool_options(options, config)
    clauses = dict(zip(BoolClauses.ALL, (must, should, must_not, filter)))
    params: dict[str, Any] = {
        name: list(queries) for name, queries in clauses.items() if queries
    }
    if not params:
        logger.debug("bool 查询没有任何子句，将匹配全部文档")
    params.update(options)
    return Q({"bool": params})


def nested_query(
    path: str,
    query: Query,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 nested 查询.

    Args:
        path: nested 字段路径，如 "comments"
        query: 在嵌套文档上执行的查询
        options: nested 查询参数，如 {"score_mode": "max", "inner_hits": {}}
        config: 构建器配置

    Returns:
        Nested 查询对象
    """
    validate_field_name(path, label="path")
    options = validate_nested_options(options, config)
    logger.debug(f"构建 nested 查询: path={path}")
    return Q({"nested": {"path": path, "query": query, **options}})


def has_child_query(
    type: str,  # noqa: A002
    query: Query,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 has_child 查询.

    Args:
        type: 子文档类型（join 关系名）
        query: 在子文档上执行的查询
        options: has_child 查询参数，如 {"score_mode": "sum", "min_children": 2}
        config: 构建器配置

    Returns:
        HasChild 查询对象
    """
    validate_field_name(type, label="type")
    options = validate_has_child_options(options, config)
    logger.debug(f"构建 has_child 查询: type={type}")
    return Q({"has_child": {"type": type, "query": query, **options}})


def has_parent_query(
    parent_type: str,
    query: Query,
    options: dict[str, Any] | None = None,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> Query:
    """
    构建 has_parent 查询.

    Args:
        parent_type: 父文档类型（join 关系名）
        query: 在父文档上执行的查询
        options: has_parent 查询参数，如 {"score": True}
        config: 构建器配置

    Returns:
        HasParent 查询对象
    """
    validate_field_name(parent_type, label="parent_type")
    options = validate_has_parent_options(options, config)
    logger.debug(f"构建 has_parent 查询: parent_type={parent_type}")
    return Q(
        {"has_parent": {"parent_type": parent_type, "query": query, **options}}
    )


# ========== 复合查询参数校验 ==========
# 构建器在创建时即调用，使错误在执行代码块之前暴露


def validate_bool_options(
    options: dict[str, Any] | None, config: BuilderConfig = DEFAULT_CONFIG
) -> dict[str, Any]:
    return validate_options(
        "bool", options, QueryOptions.BOOL, config, reserved=BoolClauses.ALL
    )


def validate_nested_options(
    options: dict[str, Any] | None, config: BuilderConfig = DEFAULT_CONFIG
) -> dict[str, Any]:
    options = validate_options(
        "nested", options, QueryOptions.NESTED, config, reserved=("path", "query")
    )
    validate_score_mode("nested", options.get("score_mode"), ScoreModes.NESTED)
    return options


def validate_has_child_options(
    options: dict[str, Any] | None, config: BuilderConfig = DEFAULT_CONFIG
) -> dict[str, Any]:
    options = validate_options(
        "has_child",
        options,
        QueryOptions.HAS_CHILD,
        config,
        reserved=("type", "query"),
    )
    validate_score_mode("has_child", options.get("score_mode"), ScoreModes.HAS_CHILD)
    return options


def validate_has_parent_options(
    options: dict[str, Any] | None, config: BuilderConfig = DEFAULT_CONFIG
) -> dict[str, Any]:
    return validate_options(
        "has_parent",
        options,
        QueryOptions.HAS_PARENT,
        config,
        reserved=("parent_type", "query"),
    )
