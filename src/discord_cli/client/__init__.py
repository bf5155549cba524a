"""Discord 客户端模块

提供 Discord REST API 的底层封装和令牌网关接口。
"""

from .base import CredentialGate, FetchResponse, is_gate_available
from .discord_client import DiscordClient, SILENT_FLAG, embed_timestamp
from .discord_params import FileAttachment, MessageOptions, MessageQuery
from .exceptions import (
    ApiError,
    ConfigurationError,
    CredentialError,
    DiscordCLIError,
    TransportError,
    UnsupportedFeatureError,
    ValidationError,
)
from .token_gate import LocalTokenGate, TokenPlacement, TokenSpec, load_token_specs

__all__ = [
    # 客户端
    "DiscordClient",
    "SILENT_FLAG",
    "embed_timestamp",
    # 令牌网关
    "CredentialGate",
    "FetchResponse",
    "is_gate_available",
    "LocalTokenGate",
    "TokenPlacement",
    "TokenSpec",
    "load_token_specs",
    # 参数类型
    "FileAttachment",
    "MessageOptions",
    "MessageQuery",
    # 异常
    "ApiError",
    "ConfigurationError",
    "CredentialError",
    "DiscordCLIError",
    "TransportError",
    "UnsupportedFeatureError",
    "ValidationError",
]
