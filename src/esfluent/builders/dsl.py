"""DSL 查询构建器模块."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from elasticsearch.dsl.query import Query

from esfluent.builders.compound import (
    BoolQueryBuilder,
    HasChildQueryBuilder,
    HasParentQueryBuilder,
    NestedQueryBuilder,
)
from esfluent.core.query import (
    match_all_query,
    match_query,
    simple_query_string_query,
    term_query,
    terms_query,
    wildcard_query,
)
from esfluent.core.utils import run_block
from esfluent.exceptions import MissingQueryError, QueryAlreadyDefinedError
from esfluent.models import DEFAULT_CONFIG, BuilderConfig
from esfluent.typing import Block, FieldValue

# 模块级别日志记录器
logger = logging.getLogger(__name__)


class QueryScope(ABC):
    """
    查询作用域基类.

    提供全部查询类型的构建方法，子类通过 _add() 决定查询的存放方式:
    - QueryBuilder: 只接受一个根查询
    - QueryListBuilder: 按调用顺序接受任意多个查询

    所有方法都返回 self，支持链式调用。

    关于 **options:
        即 elasticsearch.dsl 对应查询支持的定制参数，例如:
        - match: operator, fuzziness, analyzer, minimum_should_match
        - term / wildcard: case_insensitive
        - nested / has_child: score_mode, inner_hits, ignore_unmapped
        - 所有查询: boost, _name
    """

    def __init__(self, config: BuilderConfig | None = None):
        """
        初始化作用域.

        Args:
            config: 构建器配置，会传递给所有嵌套作用域
        """
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @abstractmethod
    def _add(self, query: Query) -> None:
        """存放构建好的查询."""
        pass

    @abstractmethod
    def build(self) -> Any:
        """返回作用域中的查询."""
        pass

    # ========== 叶子查询 ==========

    def match(self, field: str, value: FieldValue, **options: Any) -> QueryScope:
        """
        构建 match 全文匹配查询.

        Args:
            field: 匹配字段
            value: 查询值（str、int、float 或 bool）
            **options: match 查询参数，如 operator="and"、fuzziness="AUTO"

        Returns:
            self，支持链式调用
        """
        self._add(match_query(field, value, options, config=self._config))
        return self

    def term(self, field: str, value: FieldValue, **options: Any) -> QueryScope:
        """
        构建 term 精确匹配查询.

        Args:
            field: 匹配字段
            value: 精确值（str、int、float 或 bool）
            **options: term 查询参数，如 case_insensitive=True

        Returns:
            self，支持链式调用
        """
        self._add(term_query(field, value, options, config=self._config))
        return self

    def terms(
        self, field: str, values: Sequence[FieldValue], **options: Any
    ) -> QueryScope:
        """
        构建 terms 多值匹配查询，字段包含任意一个值即匹配.

        Args:
            field: 匹配字段
            values: 值列表
            **options: terms 查询参数，如 boost

        Returns:
            self，支持链式调用
        """
        self._add(terms_query(field, values, options, config=self._config))
        return self

    def wildcard(self, field: str, value: str, **options: Any) -> QueryScope:
        """
        构建 wildcard 通配符查询.

        Args:
            field: 匹配字段
            value: 通配符表达式，如 "act*"
            **options: wildcard 查询参数

        Returns:
            self，支持链式调用
        """
        self._add(wildcard_query(field, value, options, config=self._config))
        return self

    def simple_query_string(
        self, query: str, fields: Sequence[str] | None = None, **options: Any
    ) -> QueryScope:
        """
        构建 simple_query_string 查询.

        Args:
            query: 查询字符串
            fields: 查询字段列表
            **options: simple_query_string 查询参数，如 default_operator="and"

        Returns:
            self，支持链式调用
        """
        self._add(
            simple_query_string_query(query, fields, options, config=self._config)
        )
        return self

    def match_all(self, **options: Any) -> QueryScope:
        """构建 match_all 查询."""
        self._add(match_all_query(options, config=self._config))
        return self

    # ========== 复合查询 ==========

    def nested(self, path: str, block: Block, **options: Any) -> QueryScope:
        """
        构建 nested 查询.

        Args:
            path: nested 字段路径
            block: 接收 NestedQueryBuilder 的代码块，在其中调用 query() 定义内部查询
            **options: nested 查询参数，如 score_mode、inner_hits

        Returns:
            self，支持链式调用

        示例:
            scope.nested("user", lambda n: n.query(lambda q: q.match("user.name", "john")))
        """
        builder = NestedQueryBuilder(
            path, scope_factory=self._single_scope, config=self._config, options=options
        )
        run_block(block, builder)
        self._add(builder.build())
        return self

    def has_child(
        self, type: str, block: Block, **options: Any  # noqa: A002
    ) -> QueryScope:
        """
        构建 has_child 查询.

        Args:
            type: 子文档类型
            block: 接收 HasChildQueryBuilder 的代码块
            **options: has_child 查询参数，如 score_mode、min_children

        Returns:
            self，支持链式调用
        """
        builder = HasChildQueryBuilder(
            type, scope_factory=self._single_scope, config=self._config, options=options
        )
        run_block(block, builder)
        self._add(builder.build())
        return self

    def has_parent(self, parent_type: str, block: Block, **options: Any) -> QueryScope:
        """
        构建 has_parent 查询.

        Args:
            parent_type: 父文档类型
            block: 接收 HasParentQueryBuilder 的代码块
            **options: has_parent 查询参数，如 score=True

        Returns:
            self，支持链式调用
        """
        builder = HasParentQueryBuilder(
            parent_type,
            scope_factory=self._single_scope,
            config=self._config,
            options=options,
        )
        run_block(block, builder)
        self._add(builder.build())
        return self

    def bool(self, block: Block, **options: Any) -> QueryScope:
        """
        构建 bool 组合查询.

        Args:
            block: 接收 BoolQueryBuilder 的代码块，在其中定义 must/should/must_not/filter
            **options: bool 查询参数，如 minimum_should_match、boost

        Returns:
            self，支持链式调用

        示例:
            scope.bool(
                lambda b: b.must(lambda m: m.match("title", "python"))
                .filter(lambda f: f.term("status", "published"))
            )
        """
        builder = BoolQueryBuilder(
            clause_factory=self._list_scope, config=self._config, options=options
        )
        run_block(block, builder)
        self._add(builder.build())
        return self

    def _single_scope(self) -> QueryBuilder:
        return QueryBuilder(config=self._config)

    def _list_scope(self) -> QueryListBuilder:
        return QueryListBuilder(config=self._config)


class QueryBuilder(QueryScope):
    """
    根查询构建器.

    只能构建一个根查询；需要组合多个查询时请使用 bool()。

    使用示例:
        builder = QueryBuilder()
        builder.bool(
            lambda b: b.must(lambda m: m.match("title", "python"))
        )
        q = builder.build()
        search = Search(index="articles").query(q)
    """

    def __init__(self, config: BuilderConfig | None = None):
        super().__init__(config)
        self._query: Query | None = None

    @property
    def has_query(self) -> bool:
        """是否已定义根查询."""
        return self._query is not None

    def _add(self, query: Query) -> None:
        if self._query is not None:
            raise QueryAlreadyDefinedError(
                "Only one query can be built at the root level. "
                "To combine queries, use a bool query."
            )
        self._query = query

    def build(self) -> Query:
        """
        返回根查询.

        Raises:
            MissingQueryError: 未定义任何查询时抛出
        """
        if self._query is None:
            raise MissingQueryError("A query must be specified.")
        return self._query


class QueryListBuilder(QueryScope):
    """
    查询列表构建器.

    用于 bool 查询的各个子句，按调用顺序收集任意多个查询。
    """

    def __init__(self, config: BuilderConfig | None = None):
        super().__init__(config)
        self._queries: list[Query] = []

    def _add(self, query: Query) -> None:
        self._queries.append(query)

    def build(self) -> list[Query]:
        """返回已收集查询的列表副本，可能为空."""
        return list(self._queries)

    def __len__(self) -> int:
        return len(self._queries)


def query(block: Block, config: BuilderConfig | None = None) -> Query:
    """
    使用 DSL 构建查询的入口函数.

    Args:
        block: 接收 QueryBuilder 的代码块，只能定义一个根查询
        config: 构建器配置

    Returns:
        elasticsearch.dsl 查询对象，可直接传给 Search.query()

    Raises:
        MissingQueryError: 代码块中未定义查询时抛出
        QueryAlreadyDefinedError: 代码块中定义了多个根查询时抛出

    使用示例:
        q = query(lambda q: q.match("title", "python"))

        def articles(q):
            q.bool(
                lambda b: b.must(lambda m: m.match("title", "dsl").match("body", "search"))
                .filter(lambda f: f.term("status", "published"))
            )

        search = Search(index="articles").query(query(articles))
    """
    builder = QueryBuilder(config=config)
    run_block(block, builder)
    return builder.build()


def query_dict(block: Block, config: BuilderConfig | None = None) -> dict[str, Any]:
    """
    构建查询并导出为字典格式的 DSL.

    Returns:
        字典格式的查询 DSL
    """
    return query(block, config=config).to_dict()
