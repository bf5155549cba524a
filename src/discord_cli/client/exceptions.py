"""Discord CLI 异常定义

所有异常都向上抛出，只在 cli.main 中统一转换为错误输出和退出码。
"""

from typing import Any, Optional


class DiscordCLIError(Exception):
    """CLI 异常基类

    Args:
        message: 面向用户的错误信息
        hint: 可选的补充提示（单独一行输出）
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(message)


class ConfigurationError(DiscordCLIError):
    """配置异常（安全令牌系统不可用或令牌未配置）"""

    def __init__(
        self,
        message: str,
        hint: Optional[str] = None,
        remediation: Optional[str] = None,
    ):
        super().__init__(message, hint)
        self.remediation = remediation


class ValidationError(DiscordCLIError):
    """参数校验异常（本地失败，不发起网络请求）"""


class ApiError(DiscordCLIError):
    """Discord API 调用异常

    Args:
        message: 服务端返回的 message，缺失时为 "HTTP {status}"
        status: HTTP 状态码
        data: 解析后的响应体（尽力解析，可能为 None）
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.data = data


class TransportError(ApiError):
    """网络或超时异常"""


class UnsupportedFeatureError(DiscordCLIError):
    """尚未支持的功能（二进制文件上传）"""


class CredentialError(Exception):
    """令牌网关异常（令牌不存在、域名不在允许列表等）"""
