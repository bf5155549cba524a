"""渲染模块

把 API 响应渲染为终端输出：JSON（默认）或人类可读摘要。
"""

from typing import Any

from .channels import render_channels_overview
from .summary import classify_shape, pretty_json, render_summary
from .types import GuildChannels, ShapeKind


def format_output(data: Any, json_output: bool = False, summary: bool = False) -> str:
    """格式化成功结果

    --json 优先于 --summary；两者都未指定时输出 JSON。
    """
    if json_output or not summary:
        return pretty_json(data)
    return render_summary(data)


__all__ = [
    "format_output",
    "pretty_json",
    "classify_shape",
    "render_summary",
    "render_channels_overview",
    "GuildChannels",
    "ShapeKind",
]
