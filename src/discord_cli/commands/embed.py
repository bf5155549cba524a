"""Embed 消息命令模块"""

from typing import Any, Dict

from ..args import OptionValue
from ..client import MessageOptions, ValidationError, embed_timestamp
from ..shared import (
    CommandContext,
    CommandOutput,
    channel_option,
    get_option,
    register_command,
    silent_option,
)


def _parse_color(value: str) -> int:
    """解析 6 位十六进制颜色（允许 # 前缀）"""
    text = value.strip().lstrip("#")
    try:
        return int(text, 16)
    except ValueError as e:
        raise ValidationError(
            f"Invalid color '{value}': must be a hex color like 5865F2"
        ) from e


def build_embed(options: Dict[str, OptionValue]) -> Dict[str, Any]:
    """根据命令行选项构建 embed 对象（总是带 timestamp）"""
    embed: Dict[str, Any] = {}

    title = get_option(options, "title", "t")
    if title:
        embed["title"] = title
    description = get_option(options, "description", "d")
    if description:
        embed["description"] = description
    color = get_option(options, "color")
    if color:
        embed["color"] = _parse_color(color)
    url = get_option(options, "url")
    if url:
        embed["url"] = url
    footer = get_option(options, "footer")
    if footer:
        embed["footer"] = {"text": footer}
    thumbnail = get_option(options, "thumbnail")
    if thumbnail:
        embed["thumbnail"] = {"url": thumbnail}
    image = get_option(options, "image")
    if image:
        embed["image"] = {"url": image}

    author = get_option(options, "author")
    if author:
        embed["author"] = {"name": author}
        author_url = get_option(options, "author-url")
        if author_url:
            embed["author"]["url"] = author_url
        author_icon = get_option(options, "author-icon")
        if author_icon:
            embed["author"]["icon_url"] = author_icon

    embed["timestamp"] = embed_timestamp()
    return embed


async def handle_embed(ctx: CommandContext) -> CommandOutput:
    """发送 embed 消息"""
    embed = build_embed(ctx.options)
    if len(embed) <= 1:
        raise ValidationError(
            "At least one embed property (title, description, etc.) is required"
        )

    result = await ctx.client.send_embed(
        embed,
        MessageOptions(
            channel_id=channel_option(ctx.options),
            content=get_option(ctx.options, "message", "m"),
            silent=silent_option(ctx.options),
        ),
    )
    return CommandOutput(data=result)


register_command(
    name="embed",
    usage="embed",
    description="Send an embedded message",
    handler=handle_embed,
)
