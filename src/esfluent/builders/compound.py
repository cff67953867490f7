"""复合查询构建器模块.

包含 bool 查询构建器以及包裹单个子查询的 nested / has_child / has_parent 构建器。
子作用域通过工厂函数创建，由调用方决定作用域类型与配置。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from elasticsearch.dsl.query import Query

from esfluent.core.constants import BoolClauses
from esfluent.core.query import (
    bool_query,
    has_child_query,
    has_parent_query,
    nested_query,
    validate_bool_options,
    validate_has_child_options,
    validate_has_parent_options,
    validate_nested_options,
)
from esfluent.core.utils import run_block, validate_field_name
from esfluent.exceptions import MissingQueryError, QueryAlreadyDefinedError
from esfluent.models import DEFAULT_CONFIG, BuilderConfig
from esfluent.typing import Block

logger = logging.getLogger(__name__)


class BoolQueryBuilder:
    """
    Bool 查询构建器.

    支持 must、should、must_not、filter 四类子句。每个子句的代码块接收一个
    列表作用域，可以在其中定义任意多个查询，按调用顺序追加到对应子句。
    同一子句可以多次调用，结果累加。

    使用示例:
        builder = BoolQueryBuilder(clause_factory=QueryListBuilder)
        builder.must(lambda m: m.match("title", "python").match("body", "dsl"))
        builder.filter(lambda f: f.term("status", "published"))
        q = builder.build()
    """

    def __init__(
        self,
        clause_factory: Callable[[], Any],
        config: BuilderConfig | None = None,
        options: dict[str, Any] | None = None,
    ):
        """
        初始化构建器.

        Args:
            clause_factory: 子句作用域工厂函数，返回带 build() -> list[Query] 的列表作用域
            config: 构建器配置
            options: bool 查询参数，如 {"minimum_should_match": 1}，创建时即校验
        """
        self._clause_factory = clause_factory
        self._config = config or DEFAULT_CONFIG
        self._options = validate_bool_options(options, self._config)
        self._clauses: dict[str, list[Query]] = {name: [] for name in BoolClauses.ALL}

    def must(self, block: Block) -> BoolQueryBuilder:
        """
        添加 must 子句，查询必须匹配并参与评分.

        Args:
            block: 定义子句查询的代码块

        Returns:
            self，支持链式调用
        """
        return self._add_clause(BoolClauses.MUST, block)

    def should(self, block: Block) -> BoolQueryBuilder:
        """
        添加 should 子句，查询应当匹配并参与评分.

        Args:
            block: 定义子句查询的代码块

        Returns:
            self，支持链式调用
        """
        return self._add_clause(BoolClauses.SHOULD, block)

    def must_not(self, block: Block) -> BoolQueryBuilder:
        """
        添加 must_not 子句，查询必须不匹配，在过滤上下文中执行.

        Args:
            block: 定义子句查询的代码块

        Returns:
            self，支持链式调用
        """
        return self._add_clause(BoolClauses.MUST_NOT, block)

    def filter(self, block: Block) -> BoolQueryBuilder:  # noqa: A003
        """
        添加 filter 子句，查询必须匹配但不参与评分.

        Args:
            block: 定义子句查询的代码块

        Returns:
            self，支持链式调用
        """
        return self._add_clause(BoolClauses.FILTER, block)

    def _add_clause(self, name: str, block: Block) -> BoolQueryBuilder:
        """在新的列表作用域中执行代码块，并追加到指定子句."""
        builder = self._clause_factory()
        run_block(block, builder)
        queries = builder.build()
        self._clauses[name].extend(queries)
        logger.debug(f"bool.{name} 追加 {len(queries)} 个查询")
        return self

    def clause(self, name: str) -> list[Query]:
        """返回指定子句当前已收集的查询副本."""
        return list(self._clauses[name])

    def build(self) -> Query:
        """
        构建 Bool 查询对象.

        Returns:
            elasticsearch.dsl Bool 查询，只包含非空子句
        """
        return bool_query(**self._clauses, options=self._options, config=self._config)


class SingleQueryBuilder(ABC):
    """
    包裹单个子查询的构建器基类.

    query() 只能调用一次；需要多个条件时请在内部使用 bool 查询。
    子类通过 query_type 指定报错信息中的查询名称，并实现 _wrap()。
    """

    query_type: str = ""
    key_label: str = ""

    def __init__(
        self,
        key: str,
        scope_factory: Callable[[], Any],
        config: BuilderConfig | None = None,
        options: dict[str, Any] | None = None,
    ):
        """
        初始化构建器.

        Args:
            key: 关联键（nested 的 path、has_child 的 type、has_parent 的 parent_type）
            scope_factory: 单查询作用域工厂函数，返回带 build() -> Query 的作用域
            config: 构建器配置
            options: 查询参数，创建时即校验
        """
        self._key = validate_field_name(key, label=self.key_label)
        self._scope_factory = scope_factory
        self._config = config or DEFAULT_CONFIG
        self._options = self._validate_options(options)
        self._query: Query | None = None

    @property
    def has_query(self) -> bool:
        """是否已定义内部查询."""
        return self._query is not None

    def query(self, block: Block) -> SingleQueryBuilder:
        """
        定义内部查询.

        代码块先在新的单查询作用域中执行，再检查是否重复定义。

        Args:
            block: 定义内部查询的代码块

        Returns:
            self，支持链式调用

        Raises:
            QueryAlreadyDefinedError: 重复调用 query() 时抛出
        """
        builder = self._scope_factory()
        run_block(block, builder)
        built = builder.build()
        if self._query is not None:
            raise QueryAlreadyDefinedError(
                f"Only one query can be specified inside {self.query_type}.query."
            )
        self._query = built
        return self

    def build(self) -> Query:
        """
        构建查询对象.

        Raises:
            MissingQueryError: 未定义内部查询时抛出
        """
        if self._query is None:
            raise MissingQueryError(
                f"A query must be specified for {self.query_type}."
            )
        return self._wrap(self._query)

    @abstractmethod
    def _validate_options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        """校验查询参数，返回去除 None 值后的新字典."""
        pass

    @abstractmethod
    def _wrap(self, query: Query) -> Query:
        """用关联键包裹内部查询."""
        pass


class NestedQueryBuilder(SingleQueryBuilder):
    """nested 查询构建器，在嵌套对象上执行内部查询."""

    query_type = "nested"
    key_label = "path"

    def __init__(
        self,
        path: str,
        scope_factory: Callable[[], Any],
        config: BuilderConfig | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(path, scope_factory, config, options)

    @property
    def path(self) -> str:
        return self._key

    def _validate_options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        return validate_nested_options(options, self._config)

    def _wrap(self, query: Query) -> Query:
        return nested_query(
            self._key, query, options=self._options, config=self._config
        )


class HasChildQueryBuilder(SingleQueryBuilder):
    """has_child 查询构建器，按子文档条件返回父文档."""

    query_type = "has_child"
    key_label = "type"

    def __init__(
        self,
        type: str,  # noqa: A002
        scope_factory: Callable[[], Any],
        config: BuilderConfig | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(type, scope_factory, config, options)

    @property
    def type(self) -> str:  # noqa: A003
        return self._key

    def _validate_options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        return validate_has_child_options(options, self._config)

    def _wrap(self, query: Query) -> Query:
        return has_child_query(
            self._key, query, options=self._options, config=self._config
        )


class HasParentQueryBuilder(SingleQueryBuilder):
    """has_parent 查询构建器，按父文档条件返回子文档."""

    query_type = "has_parent"
    key_label = "parent_type"

    def __init__(
        self,
        parent_type: str,
        scope_factory: Callable[[], Any],
        config: BuilderConfig | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(parent_type, scope_factory, config, options)

    @property
    def parent_type(self) -> str:
        return self._key

    def _validate_options(self, options: dict[str, Any] | None) -> dict[str, Any]:
        return validate_has_parent_options(options, self._config)

    def _wrap(self, query: Query) -> Query:
        return has_parent_query(
            self._key, query, options=self._options, config=self._config
        )
