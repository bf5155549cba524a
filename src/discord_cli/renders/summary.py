"""摘要渲染器

把 Discord API 响应渲染成人类可读的摘要。

流程分两步：
1. classify_shape() 检查字段一次，得到 ShapeKind
2. render_summary() 按 ShapeKind 分派到对应的渲染函数

一个对象可能同时满足多个形状，判定顺序即 ShapeKind 的定义顺序，先匹配者胜出。
"""

import json
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .types import CHANNEL_TYPE_NAMES, SHORT_CHANNEL_TYPE_NAMES, ShapeKind

MESSAGE_PREVIEW_LENGTH = 100


def pretty_json(data: Any) -> str:
    """两空格缩进的 JSON，保持键的插入顺序"""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _classify_list(data: List[Any]) -> ShapeKind:
    if not data:
        return ShapeKind.EMPTY_LIST

    first = data[0]
    if not isinstance(first, dict):
        return ShapeKind.GENERIC_LIST
    if "content" in first:
        return ShapeKind.MESSAGE_LIST
    if first.get("name") and first.get("id"):
        return ShapeKind.GUILD_LIST
    if "type" in first:
        return ShapeKind.CHANNEL_LIST
    return ShapeKind.GENERIC_LIST


def classify_shape(data: Any) -> ShapeKind:
    """判定响应形状"""
    if isinstance(data, list):
        return _classify_list(data)
    if not isinstance(data, dict):
        return ShapeKind.UNKNOWN

    if data.get("username"):
        return ShapeKind.USER
    if data.get("name") and "type" in data:
        return ShapeKind.CHANNEL
    if data.get("id") and data.get("type") == 1:
        return ShapeKind.DM_CHANNEL
    if data.get("id"):
        return ShapeKind.GENERIC_OBJECT
    return ShapeKind.UNKNOWN


def format_timestamp(value: Any) -> str:
    """把 ISO-8601 时间戳转换为本地时间字符串"""
    if not isinstance(value, str) or not value:
        return "Invalid Date"
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return "Invalid Date"
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def channel_type_label(
    channel_type: Any, table: Optional[Dict[int, str]] = None
) -> str:
    """频道类型编号转名称，未知编号显示为 "Type {n}" """
    names = CHANNEL_TYPE_NAMES if table is None else table
    label = names.get(channel_type) if isinstance(channel_type, int) else None
    return label or f"Type {channel_type}"


def _render_message(message: Dict[str, Any]) -> str:
    timestamp = format_timestamp(message.get("timestamp"))
    author = message.get("author") or {}
    if not isinstance(author, dict):
        author = {}
    author_name = author.get("username") or "Unknown"
    content = message.get("content")
    preview = content[:MESSAGE_PREVIEW_LENGTH] if isinstance(content, str) else None
    return f"[{timestamp}] {author_name}: {preview or '(empty)'}"


def _render_guild(guild: Dict[str, Any]) -> str:
    owner = " [Owner]" if guild.get("owner") else ""
    return f"🏠 {guild.get('name')} (ID: {guild.get('id')}){owner}"


def _render_channel_item(channel: Dict[str, Any]) -> str:
    label = channel_type_label(channel.get("type"))
    name = f"#{channel['name']}" if channel.get("name") else "DM"
    emoji = "💬" if label == "DM" else "📄"
    return f"{emoji} {name} (ID: {channel.get('id')}, Type: {label})"


def _render_user(data: Dict[str, Any]) -> str:
    discriminator = data.get("discriminator", "0")
    return f"User: {data['username']}#{discriminator} (ID: {data.get('id')})"


def _render_channel(data: Dict[str, Any]) -> str:
    label = channel_type_label(data.get("type"), SHORT_CHANNEL_TYPE_NAMES)
    return f"Channel: #{data['name']} ({label}, ID: {data.get('id')})"


def _render_dm_channel(data: Dict[str, Any]) -> str:
    recipients = data.get("recipients") or []
    recipient = recipients[0] if recipients else None
    if isinstance(recipient, dict):
        name = f"{recipient.get('username')}#{recipient.get('discriminator', '0')}"
    else:
        name = "Unknown User"
    return f"💬 DM Channel with {name} (ID: {data['id']})"


def _render_lines(
    items: List[Any], render_item: Callable[[Dict[str, Any]], str]
) -> str:
    # 列表类型只按首元素判断，其余元素不是对象时按 JSON 输出
    return "\n".join(
        render_item(item) if isinstance(item, dict) else pretty_json(item)
        for item in items
    )


_RENDERERS: Dict[ShapeKind, Callable[[Any], str]] = {
    ShapeKind.EMPTY_LIST: lambda data: "No results found",
    ShapeKind.MESSAGE_LIST: lambda data: _render_lines(data, _render_message),
    ShapeKind.GUILD_LIST: lambda data: _render_lines(data, _render_guild),
    ShapeKind.CHANNEL_LIST: lambda data: _render_lines(data, _render_channel_item),
    ShapeKind.GENERIC_LIST: lambda data: "\n---\n".join(
        pretty_json(item) for item in data
    ),
    ShapeKind.USER: _render_user,
    ShapeKind.CHANNEL: _render_channel,
    ShapeKind.DM_CHANNEL: _render_dm_channel,
    ShapeKind.GENERIC_OBJECT: lambda data: f"✅ Success (ID: {data['id']})",
    ShapeKind.UNKNOWN: pretty_json,
}


def render_summary(data: Any) -> str:
    """渲染摘要"""
    return _RENDERERS[classify_shape(data)](data)
