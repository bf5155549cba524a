"""服务器/频道列表命令模块"""

from typing import List

from loguru import logger

from ..client import DiscordCLIError
from ..renders import GuildChannels, render_channels_overview
from ..shared import CommandContext, CommandOutput, has_flag, register_command


async def handle_channels(ctx: CommandContext) -> CommandOutput:
    """列出服务器；--summary 时逐个获取服务器的频道

    频道按服务器顺序依次获取，某个服务器获取失败时只在该服务器下显示错误，
    继续处理后续服务器。
    """
    guilds = await ctx.client.get_guilds()

    if not has_flag(ctx.options, "summary"):
        return CommandOutput(data=guilds)

    entries: List[GuildChannels] = []
    for guild in guilds or []:
        try:
            channels = await ctx.client.get_guild_channels(guild.get("id"))
            entries.append(GuildChannels(guild=guild, channels=channels))
        except DiscordCLIError as e:
            logger.warning(f"Cannot access channels of guild {guild.get('id')}: {e}")
            entries.append(GuildChannels(guild=guild, error=e.message))

    return CommandOutput(text=render_channels_overview(entries))


register_command(
    name="channels",
    usage="channels",
    description="List accessible channels/servers",
    handler=handle_channels,
)
