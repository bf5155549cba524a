"""共享工具模块

提供命令模块共用的工具函数和类型，包括：
- 命令注册管理
- 命令上下文与输出
- 选项读取（长短别名）
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from .args import OptionValue, ParsedCommand
from .client import DiscordClient

PROGRAM_NAME = "discord-cli"


@dataclass
class CommandOutput:
    """命令执行结果

    data 交给格式化器输出；text 为已渲染好的文本，直接输出。
    """

    data: Any = None
    text: Optional[str] = None


@dataclass
class CommandContext:
    """命令执行上下文

    客户端按需创建：help 等不需要网络的命令不会触发令牌网关初始化。
    """

    parsed: ParsedCommand
    client_factory: Callable[[], DiscordClient]
    _client: Optional[DiscordClient] = field(default=None, repr=False)

    @property
    def options(self) -> Dict[str, OptionValue]:
        return self.parsed.options

    @property
    def client(self) -> DiscordClient:
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    def positional(self, index: int = 0) -> Optional[str]:
        if index < len(self.parsed.positional):
            return self.parsed.positional[index]
        return None


CommandHandler = Callable[[CommandContext], Awaitable[CommandOutput]]

# 命令注册表：各命令模块在导入时将自身的元信息注册到这里
COMMAND_REGISTRY = []  # list of dict: {name, usage, description, handler}


def register_command(
    name: str, usage: str, description: str, handler: Optional[CommandHandler] = None
):
    """注册命令元信息，供 help 命令聚合显示和分发器查找。

    参数:
    - name: 命令名（如 send）
    - usage: 用法字符串（不含程序名，例如 "send <message>"）
    - description: 简短描述
    - handler: 命令处理函数；为 None 时只出现在帮助中
    """

    COMMAND_REGISTRY.append(
        {
            "name": name,
            "usage": usage,
            "description": description,
            "handler": handler,
        }
    )


def get_command(name: str) -> Optional[Dict[str, Any]]:
    """按名称查找已注册命令"""
    for meta in COMMAND_REGISTRY:
        if meta["name"] == name:
            return meta
    return None


def get_option(options: Dict[str, OptionValue], *names: str) -> Optional[str]:
    """按别名顺序读取选项值

    没有值的布尔选项（如单独的 -c）视为未提供。
    """
    for name in names:
        value = options.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def has_flag(options: Dict[str, OptionValue], *names: str) -> bool:
    """任一别名被设置（布尔或非空值）即为 True"""
    for name in names:
        value = options.get(name)
        if value is True or (isinstance(value, str) and value):
            return True
    return False


def channel_option(options: Dict[str, OptionValue]) -> Optional[str]:
    return get_option(options, "channel", "c")


def silent_option(options: Dict[str, OptionValue]) -> bool:
    """默认静默，--no-silent 时发送通知"""
    return not has_flag(options, "no-silent")
