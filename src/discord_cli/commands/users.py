"""用户命令模块（me、dm）"""

from ..client import ValidationError
from ..shared import CommandContext, CommandOutput, PROGRAM_NAME, register_command


async def handle_me(ctx: CommandContext) -> CommandOutput:
    """获取当前 Bot 用户信息"""
    return CommandOutput(data=await ctx.client.get_current_user())


async def handle_dm(ctx: CommandContext) -> CommandOutput:
    """创建或获取与用户的私信频道"""
    user_id = ctx.positional(0)
    if user_id is None:
        raise ValidationError(
            "User ID is required", hint=f"Usage: {PROGRAM_NAME} dm <userID>"
        )
    return CommandOutput(data=await ctx.client.create_dm_channel(user_id))


register_command(
    name="me",
    usage="me",
    description="Get current user info",
    handler=handle_me,
)

register_command(
    name="dm",
    usage="dm <userID>",
    description="Create/find DM channel with user",
    handler=handle_dm,
)
