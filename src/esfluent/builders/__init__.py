"""构建器模块导出."""

from esfluent.builders.compound import (
    BoolQueryBuilder,
    HasChildQueryBuilder,
    HasParentQueryBuilder,
    NestedQueryBuilder,
    SingleQueryBuilder,
)
from esfluent.builders.dsl import (
    QueryBuilder,
    QueryListBuilder,
    QueryScope,
    query,
    query_dict,
)

__all__ = [
    "QueryScope",
    "QueryBuilder",
    "QueryListBuilder",
    "BoolQueryBuilder",
    "SingleQueryBuilder",
    "NestedQueryBuilder",
    "HasChildQueryBuilder",
    "HasParentQueryBuilder",
    "query",
    "query_dict",
]
