"""查询对象构造函数与校验函数单元测试."""

import logging

import pytest

from esfluent import BuilderConfig, InvalidQueryValueError, UnsupportedOptionError
from esfluent.core import (
    bool_query,
    match_all_query,
    match_query,
    nested_query,
    simple_query_string_query,
    term_query,
    terms_query,
    wildcard_query,
)
from esfluent.core.utils import (
    run_block,
    validate_field_name,
    validate_field_value,
    validate_options,
    validate_terms_values,
)


class TestLeafQueries:
    """叶子查询构造测试."""

    def test_match_float_value(self):
        """测试 match 查询支持浮点数."""
        assert match_query("price", 9.5).to_dict() == {"match": {"price": 9.5}}

    def test_match_invalid_value(self):
        """测试 match 查询拒绝非标量值."""
        with pytest.raises(InvalidQueryValueError, match="title"):
            match_query("title", ["a", "b"])

    def test_match_none_value(self):
        """测试 match 查询拒绝 None."""
        with pytest.raises(InvalidQueryValueError):
            match_query("title", None)

    def test_term_empty_field(self):
        """测试 term 查询拒绝空字段名."""
        with pytest.raises(InvalidQueryValueError, match="field cannot be empty"):
            term_query("", "x")

    def test_term_unsupported_option(self):
        """测试 term 查询不支持的参数."""
        with pytest.raises(UnsupportedOptionError, match="fuzziness"):
            term_query("status", "x", {"fuzziness": "AUTO"})

    def test_named_query(self):
        """测试 _name 参数."""
        assert term_query("status", "x", {"_name": "by_status"}).to_dict() == {
            "term": {"status": {"value": "x", "_name": "by_status"}}
        }

    def test_none_options_are_dropped(self):
        """测试值为 None 的参数不输出."""
        assert match_query("title", "x", {"operator": None}).to_dict() == {
            "match": {"title": "x"}
        }

    def test_terms_rejects_string(self):
        """测试 terms 查询拒绝字符串作为值列表."""
        with pytest.raises(InvalidQueryValueError, match="list or tuple"):
            terms_query("tags", "python")

    def test_terms_options(self):
        """测试 terms 查询参数与字段同级."""
        assert terms_query("tags", ["a"], {"boost": 2.0}).to_dict() == {
            "terms": {"tags": ["a"], "boost": 2.0}
        }

    def test_terms_empty_values_warns(self, caplog):
        """测试 terms 空值列表记录警告."""
        with caplog.at_level(logging.WARNING, logger="esfluent.core.utils"):
            q = terms_query("tags", [])

        assert q.to_dict() == {"terms": {"tags": []}}
        assert "tags" in caplog.text

    def test_wildcard_requires_string(self):
        """测试 wildcard 查询只接受字符串."""
        with pytest.raises(InvalidQueryValueError):
            wildcard_query("code", 12)

    def test_wildcard_options(self):
        """测试 wildcard 查询参数."""
        assert wildcard_query("code", "ab*", {"case_insensitive": True}).to_dict() == {
            "wildcard": {"code": {"value": "ab*", "case_insensitive": True}}
        }

    def test_simple_query_string_fields_must_be_list(self):
        """测试 simple_query_string 的 fields 必须为列表."""
        with pytest.raises(InvalidQueryValueError, match="fields"):
            simple_query_string_query("x", fields="title")

    def test_match_all_options(self):
        """测试 match_all 查询参数."""
        assert match_all_query({"boost": 1.2}).to_dict() == {"match_all": {"boost": 1.2}}

    def test_field_named_like_q_argument(self):
        """测试字段名与 Q 的参数名相同."""
        assert term_query("name_or_query", "x").to_dict() == {
            "term": {"name_or_query": "x"}
        }

    def test_terms_option_named_like_field(self):
        """测试 terms 参数名与字段名相同时报错."""
        with pytest.raises(UnsupportedOptionError, match="Reserved option"):
            terms_query("boost", [1], {"boost": 2.0})

    def test_reserved_option_non_strict(self):
        """测试非严格模式下保留参数名仍然报错."""
        config = BuilderConfig(strict_options=False)

        with pytest.raises(UnsupportedOptionError, match="query"):
            match_query("title", "x", {"query": "y"}, config=config)


class TestCompoundQueries:
    """复合查询构造测试."""

    def test_bool_query_clauses(self):
        """测试 bool 查询只输出非空子句."""
        q = bool_query(must=[term_query("a", 1)], must_not=[term_query("b", 2)])

        assert q.to_dict() == {
            "bool": {
                "must": [{"term": {"a": 1}}],
                "must_not": [{"term": {"b": 2}}],
            }
        }

    def test_nested_query(self):
        """测试 nested 查询构造."""
        q = nested_query(
            "user", match_query("user.name", "john"), {"ignore_unmapped": True}
        )

        assert q.to_dict() == {
            "nested": {
                "path": "user",
                "query": {"match": {"user.name": "john"}},
                "ignore_unmapped": True,
            }
        }

    def test_bool_query_rejects_clause_option(self):
        """测试 bool 参数名与子句同名时报错."""
        with pytest.raises(UnsupportedOptionError, match="must"):
            bool_query(options={"must": []})

    def test_nested_query_rejects_structure_options(self):
        """测试 nested 参数不能覆盖 path 与 query."""
        with pytest.raises(UnsupportedOptionError, match="path, query"):
            nested_query(
                "user", match_query("user.name", "john"), {"query": 1, "path": "x"}
            )


class TestBuilderConfig:
    """BuilderConfig 测试."""

    def test_defaults(self):
        """测试默认值."""
        config = BuilderConfig()
        assert config.strict_options is True
        assert config.validate_values is True

    def test_invalid_type(self):
        """测试非布尔配置项."""
        with pytest.raises(TypeError):
            BuilderConfig(strict_options="yes")

    def test_frozen(self):
        """测试配置不可修改."""
        config = BuilderConfig()
        with pytest.raises(AttributeError):
            config.strict_options = False

    def test_non_strict_passes_unknown_options(self, caplog):
        """测试非严格模式下未知参数原样传递并记录警告."""
        config = BuilderConfig(strict_options=False)

        with caplog.at_level(logging.WARNING, logger="esfluent.core.utils"):
            q = term_query("status", "x", {"custom_flag": True}, config=config)

        assert q.to_dict() == {"term": {"status": {"value": "x", "custom_flag": True}}}
        assert "custom_flag" in caplog.text

    def test_skip_value_validation(self):
        """测试关闭值校验."""
        config = BuilderConfig(validate_values=False)
        q = match_query("created", {"gte": "now-1d"}, config=config)

        assert q.to_dict() == {"match": {"created": {"gte": "now-1d"}}}


class TestValidators:
    """校验函数测试."""

    def test_validate_field_name_type(self):
        """测试字段名类型校验."""
        with pytest.raises(InvalidQueryValueError, match="must be a string"):
            validate_field_name(1)

    def test_validate_field_name_label(self):
        """测试报错信息使用自定义名称."""
        with pytest.raises(InvalidQueryValueError, match="type cannot be empty"):
            validate_field_name("", label="type")

    def test_validate_field_value_bool(self):
        """测试布尔值合法."""
        assert validate_field_value("flag", False) is False

    def test_validate_terms_values_returns_copy(self):
        """测试 terms 值列表返回副本."""
        values = ["a", "b"]
        result = validate_terms_values("tags", values)

        assert result == values
        assert result is not values

    def test_validate_terms_values_checks_items(self):
        """测试 terms 值列表逐项校验."""
        with pytest.raises(InvalidQueryValueError):
            validate_terms_values("tags", ["a", None])

    def test_validate_options_reports_all_unknown(self):
        """测试报告全部未知参数."""
        with pytest.raises(UnsupportedOptionError, match="bar, foo"):
            validate_options("match", {"foo": 1, "bar": 2}, ("boost",))

    def test_run_block_calls_block(self):
        """测试执行代码块."""
        calls = []
        run_block(calls.append, "builder")

        assert calls == ["builder"]

    def test_run_block_not_callable(self):
        """测试不可调用的代码块."""
        with pytest.raises(TypeError, match="callable"):
            run_block(42, "builder")
