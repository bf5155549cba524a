"""发送消息命令模块（send、send-file）"""

from ..client import MessageOptions, ValidationError
from ..shared import (
    CommandContext,
    CommandOutput,
    PROGRAM_NAME,
    channel_option,
    get_option,
    has_flag,
    register_command,
    silent_option,
)


async def handle_send(ctx: CommandContext) -> CommandOutput:
    """发送文本消息"""
    content = ctx.positional(0)
    if content is None:
        raise ValidationError("Message content is required")

    result = await ctx.client.send_message(
        content,
        MessageOptions(
            channel_id=channel_option(ctx.options),
            tts=has_flag(ctx.options, "tts"),
            silent=silent_option(ctx.options),
        ),
    )
    return CommandOutput(data=result)


async def handle_send_file(ctx: CommandContext) -> CommandOutput:
    """发送文件（只发送包含文件名的文本消息）"""
    file_path = ctx.positional(0)
    if file_path is None:
        raise ValidationError(
            "File path is required", hint=f"Usage: {PROGRAM_NAME} send-file <file>"
        )

    result = await ctx.client.send_file(
        file_path,
        MessageOptions(
            channel_id=channel_option(ctx.options),
            content=get_option(ctx.options, "message", "m"),
            silent=silent_option(ctx.options),
        ),
    )
    return CommandOutput(data=result)


register_command(
    name="send",
    usage="send <message>",
    description="Send a message to a channel",
    handler=handle_send,
)

register_command(
    name="send-file",
    usage="send-file <file>",
    description="Send a file to a channel",
    handler=handle_send_file,
)
