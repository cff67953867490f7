"""esfluent 类型定义模块."""

from collections.abc import Callable, Sequence
from typing import Any, Dict, Union

# 叶子查询的字段值类型
FieldValue = Union[str, int, float, bool]

# terms 查询的值列表类型
FieldValues = Sequence[FieldValue]

# 查询参数字典类型
# 格式: {参数名: 参数值}，如 {"operator": "and", "boost": 2.0}
OptionsDict = Dict[str, Any]

# 作用域代码块类型，接收构建器实例，返回值被忽略
Block = Callable[[Any], Any]
