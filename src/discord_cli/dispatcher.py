"""命令分发器

把解析后的命令映射到已注册的处理函数。本模块只抛出异常，
不输出、不退出进程，这些由 cli.main 负责。
"""

from typing import Callable

from loguru import logger

from . import commands  # noqa: F401  注册全部命令
from .args import ParsedCommand
from .client import DiscordClient, ValidationError
from .shared import (
    PROGRAM_NAME,
    CommandContext,
    CommandOutput,
    get_command,
    has_flag,
)


def wants_help(parsed: ParsedCommand) -> bool:
    """无命令、help 命令或 --help 时显示帮助"""
    return (
        parsed.command is None
        or parsed.command == "help"
        or has_flag(parsed.options, "help", "h")
    )


async def dispatch(
    parsed: ParsedCommand, client_factory: Callable[[], DiscordClient]
) -> CommandOutput:
    """执行一条命令

    Args:
        parsed: 解析后的命令
        client_factory: 创建 DiscordClient 的函数（只在需要网络时调用）

    Raises:
        ValidationError: 未知命令或缺少参数
        DiscordCLIError: 其他执行错误
    """
    name = "help" if wants_help(parsed) else parsed.command
    meta = get_command(name)
    if meta is None or meta["handler"] is None:
        raise ValidationError(
            f'Unknown command "{name}"',
            hint=f'Run "{PROGRAM_NAME} help" for usage information',
        )

    logger.debug(f"Dispatching command: {name}")
    ctx = CommandContext(parsed=parsed, client_factory=client_factory)
    return await meta["handler"](ctx)
