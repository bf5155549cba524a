"""频道命令模块（messages、channel）"""

from ..client import MessageQuery
from ..shared import (
    CommandContext,
    CommandOutput,
    channel_option,
    get_option,
    register_command,
)

DEFAULT_MESSAGE_LIMIT = 50


async def handle_messages(ctx: CommandContext) -> CommandOutput:
    """获取频道消息历史"""
    query = MessageQuery(
        limit=get_option(ctx.options, "limit", "l") or DEFAULT_MESSAGE_LIMIT,
        before=get_option(ctx.options, "before"),
        after=get_option(ctx.options, "after"),
    )
    result = await ctx.client.get_messages(channel_option(ctx.options), query)
    return CommandOutput(data=result)


async def handle_channel(ctx: CommandContext) -> CommandOutput:
    """获取频道信息"""
    result = await ctx.client.get_channel(channel_option(ctx.options))
    return CommandOutput(data=result)


register_command(
    name="messages",
    usage="messages",
    description="Get messages from a channel",
    handler=handle_messages,
)

register_command(
    name="channel",
    usage="channel",
    description="Get channel information",
    handler=handle_channel,
)
