"""esfluent 常量定义模块."""


class QueryOptions:
    """各查询类型允许的定制参数.

    参数名与 Elasticsearch Query DSL 保持一致，值原样交给 elasticsearch.dsl.
    """

    # 所有查询通用参数
    COMMON = ("boost", "_name")

    MATCH = COMMON + (
        "analyzer",
        "auto_generate_synonyms_phrase_query",
        "cutoff_frequency",
        "fuzziness",
        "fuzzy_rewrite",
        "fuzzy_transpositions",
        "lenient",
        "max_expansions",
        "minimum_should_match",
        "operator",
        "prefix_length",
        "zero_terms_query",
    )

    TERM = COMMON + ("case_insensitive",)

    TERMS = COMMON

    WILDCARD = COMMON + ("case_insensitive", "rewrite")

    SIMPLE_QUERY_STRING = COMMON + (
        "analyze_wildcard",
        "analyzer",
        "auto_generate_synonyms_phrase_query",
        "default_operator",
        "flags",
        "fuzzy_max_expansions",
        "fuzzy_prefix_length",
        "fuzzy_transpositions",
        "lenient",
        "minimum_should_match",
        "quote_field_suffix",
    )

    MATCH_ALL = COMMON

    BOOL = COMMON + ("minimum_should_match",)

    NESTED = COMMON + ("ignore_unmapped", "inner_hits", "score_mode")

    HAS_CHILD = COMMON + (
        "ignore_unmapped",
        "inner_hits",
        "max_children",
        "min_children",
        "score_mode",
    )

    HAS_PARENT = COMMON + ("ignore_unmapped", "inner_hits", "score")


class ScoreModes:
    """关联查询支持的评分模式."""

    NESTED = ("avg", "max", "min", "sum", "none")

    HAS_CHILD = ("none", "avg", "sum", "max", "min")


class BoolClauses:
    """Bool 查询的子句名称，按输出顺序排列."""

    MUST = "must"
    SHOULD = "should"
    MUST_NOT = "must_not"
    FILTER = "filter"

    ALL = (MUST, SHOULD, MUST_NOT, FILTER)
