"""查询构建使用示例.

本示例展示如何使用 esfluent 构建查询树:
1. 单个叶子查询
2. bool 组合查询
3. nested 嵌套文档查询
4. has_child / has_parent 父子文档查询
"""

from elasticsearch.dsl import Search

from esfluent import BuilderConfig, QueryAlreadyDefinedError, query


# ==================== 示例 1: 叶子查询 ====================
def example_leaf_query():
    """示例: 构建单个 match 查询."""
    q = query(lambda q: q.match("title", "elasticsearch guide", operator="and"))

    print("match 查询 DSL:")
    print(q.to_dict())
    # {'match': {'title': {'query': 'elasticsearch guide', 'operator': 'and'}}}


# ==================== 示例 2: bool 组合查询 ====================
def example_bool_query():
    """示例: 使用 bool 查询组合多个条件.

    场景: 标题包含 "python"、已发布、带有 tutorial 或 guide 标签、作者不是匿名用户
    """

    def articles(q):
        q.bool(
            lambda b: b.must(lambda m: m.match("title", "python"))
            .filter(
                lambda f: f.term("status", "published").terms(
                    "tags", ["tutorial", "guide"]
                )
            )
            .must_not(lambda n: n.term("author", "anonymous"))
        )

    search = Search(index="articles").query(query(articles))

    print("bool 查询 DSL:")
    print(search.to_dict())


# ==================== 示例 3: nested 查询 ====================
def example_nested_query():
    """示例: 查询评论中包含 "great" 且评分为 5 的文章."""

    def comments(n):
        n.query(
            lambda q: q.bool(
                lambda b: b.must(
                    lambda m: m.match("comments.text", "great").term(
                        "comments.stars", 5
                    )
                )
            )
        )

    q = query(
        lambda q: q.nested("comments", comments, score_mode="max", inner_hits={})
    )

    print("nested 查询 DSL:")
    print(q.to_dict())


# ==================== 示例 4: 父子文档查询 ====================
def example_join_queries():
    """示例: 通过 join 关系查询父文档与子文档."""
    # 有开发岗位员工的公司
    companies = query(
        lambda q: q.has_child(
            "employee",
            lambda c: c.query(lambda q: q.match("role", "developer")),
            min_children=2,
        )
    )

    # 属于工程部门的员工
    employees = query(
        lambda q: q.has_parent(
            "company",
            lambda p: p.query(lambda q: q.term("department", "engineering")),
        )
    )

    print("has_child 查询 DSL:")
    print(companies.to_dict())
    print("has_parent 查询 DSL:")
    print(employees.to_dict())


# ==================== 示例 5: 单根查询限制 ====================
def example_single_root():
    """示例: 根作用域只允许一个查询，需要组合时请使用 bool."""
    try:
        query(lambda q: q.match("title", "a").match("body", "b"))
    except QueryAlreadyDefinedError as e:
        print(f"构建失败: {e}")

    # 非严格模式下，未知参数会原样传递给 ES
    q = query(
        lambda q: q.match_all(custom_param=1),
        config=BuilderConfig(strict_options=False),
    )
    print(q.to_dict())


if __name__ == "__main__":
    example_leaf_query()
    example_bool_query()
    example_nested_query()
    example_join_queries()
    example_single_root()
