"""esfluent - Fluent Elasticsearch Query DSL Builder.

这是一个用于以链式、类型安全的方式构建 Elasticsearch 查询树的 Python 库。
查询对象与序列化均由 elasticsearch.dsl 提供，本库只负责组合与校验。

主要功能:
    - query: 构建单个根查询的入口函数
    - QueryBuilder: 根查询构建器（只允许一个根查询）
    - BoolQueryBuilder: bool 查询构建器（must/should/must_not/filter）
    - NestedQueryBuilder / HasChildQueryBuilder / HasParentQueryBuilder: 关联查询构建器

使用示例:
    from esfluent import query

    q = query(
        lambda q: q.bool(
            lambda b: b.must(lambda m: m.match("title", "python"))
            .filter(lambda f: f.terms("tags", ["tutorial", "guide"]))
        )
    )
    q.to_dict()
"""

__version__ = "0.1.0"

# 导出构建器
from esfluent.builders import (
    BoolQueryBuilder,
    HasChildQueryBuilder,
    HasParentQueryBuilder,
    NestedQueryBuilder,
    QueryBuilder,
    QueryListBuilder,
    QueryScope,
    query,
    query_dict,
)

# 导出异常
from esfluent.exceptions import (
    InvalidQueryValueError,
    MissingQueryError,
    QueryAlreadyDefinedError,
    QueryDslError,
    UnsupportedOptionError,
)

# 导出配置
from esfluent.models import BuilderConfig

__all__ = [
    # 版本
    "__version__",
    # 入口函数
    "query",
    "query_dict",
    # 构建器
    "QueryScope",
    "QueryBuilder",
    "QueryListBuilder",
    "BoolQueryBuilder",
    "NestedQueryBuilder",
    "HasChildQueryBuilder",
    "HasParentQueryBuilder",
    # 配置
    "BuilderConfig",
    # 异常
    "QueryDslError",
    "QueryAlreadyDefinedError",
    "MissingQueryError",
    "InvalidQueryValueError",
    "UnsupportedOptionError",
]
