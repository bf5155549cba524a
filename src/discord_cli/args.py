"""命令行参数解析

规则（从左到右扫描）：
- 不以 - 开头的参数：第一个作为命令，其余按顺序放入 positional
- --name=value：值原样保留（可以为空字符串）
- --name value：下一个参数存在且不以 - 开头时作为值，否则为 True
- -x：单字符选项永远是 True，不消耗后续参数
- -name：多字符选项与 --name 规则相同（不支持 -xyz 拆分为多个选项）
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

OptionValue = Union[str, bool]


@dataclass
class ParsedCommand:
    """解析结果"""

    command: Optional[str] = None
    positional: List[str] = field(default_factory=list)
    options: Dict[str, OptionValue] = field(default_factory=dict)


def _split_option(name: str):
    if "=" in name:
        key, value = name.split("=", 1)
        return key, value
    return name, None


def parse_args(tokens: Sequence[str]) -> ParsedCommand:
    """解析参数列表，对任何输入都不会抛出异常"""
    parsed = ParsedCommand()
    tokens = list(tokens)

    i = 0
    while i < len(tokens):
        token = tokens[i]

        if not token.startswith("-"):
            if parsed.command is None:
                parsed.command = token
            else:
                parsed.positional.append(token)
            i += 1
            continue

        if token.startswith("--"):
            name = token[2:]
        else:
            name = token[1:]
            if len(name) <= 1:
                # 单字符选项
                parsed.options[name] = True
                i += 1
                continue

        key, value = _split_option(name)
        if value is not None:
            parsed.options[key] = value
        elif i + 1 < len(tokens) and not tokens[i + 1].startswith("-"):
            parsed.options[key] = tokens[i + 1]
            i += 1
        else:
            parsed.options[key] = True
        i += 1

    return parsed
