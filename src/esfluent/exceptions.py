"""esfluent 异常定义模块."""


class QueryDslError(Exception):
    """esfluent 基础异常类."""

    pass


class QueryAlreadyDefinedError(QueryDslError):
    """同一作用域内重复定义根查询异常."""

    pass


class MissingQueryError(QueryDslError):
    """作用域构建时未定义任何查询异常."""

    pass


class InvalidQueryValueError(QueryDslError):
    """字段名、字段值或关联键无效异常."""

    pass


class UnsupportedOptionError(QueryDslError):
    """查询类型不支持的参数异常."""

    pass
