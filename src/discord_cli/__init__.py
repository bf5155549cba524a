"""Discord CLI

通过令牌网关调用 Discord REST API 的命令行客户端：发送消息和 embed、
读取消息历史、列出服务器与频道、创建私信频道。令牌由网关注入，客户端不可见。
"""

__version__ = "1.0.0"

from .args import ParsedCommand, parse_args  # noqa: E402
from .client import DiscordClient, LocalTokenGate  # noqa: E402
from .renders import format_output  # noqa: E402

__all__ = [
    "__version__",
    "ParsedCommand",
    "parse_args",
    "DiscordClient",
    "LocalTokenGate",
    "format_output",
]
