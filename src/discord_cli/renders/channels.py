"""channels --summary 渲染器"""

from typing import List

from .types import LISTED_CHANNEL_TYPES, MAX_CHANNELS_PER_GUILD, GuildChannels


def render_channels_overview(entries: List[GuildChannels]) -> str:
    """渲染服务器及其文本频道列表

    每个服务器最多列出 MAX_CHANNELS_PER_GUILD 个文本/公告频道，
    获取失败的服务器只显示错误信息，不影响其他服务器。
    """
    lines = ["Accessible Servers/Channels:", ""]

    for entry in entries:
        guild = entry.guild
        lines.append(f"🏠 {guild.get('name')} (ID: {guild.get('id')})")

        if entry.error is not None:
            lines.append(f"   (Cannot access channels: {entry.error})")
        else:
            text_channels = [
                c
                for c in entry.channels or []
                if isinstance(c, dict) and c.get("type") in LISTED_CHANNEL_TYPES
            ]
            for channel in text_channels[:MAX_CHANNELS_PER_GUILD]:
                lines.append(f"   📄 #{channel.get('name')} (ID: {channel.get('id')})")
            remaining = len(text_channels) - MAX_CHANNELS_PER_GUILD
            if remaining > 0:
                lines.append(f"   ... and {remaining} more channels")

        lines.append("")

    return "\n".join(lines)
