"""配置模块（配置接口和实现）"""

from typing import Optional, Protocol

from loguru import logger
from pydantic import BaseModel

from . import __version__

__all__ = ["Config", "CLIConfig", "set_config", "get_config", "reset_config"]


DEFAULT_BASE_URL = "https://discord.com/api/v9"
DEFAULT_USER_AGENT = f"DiscordBot (https://discord.com/developers/docs, {__version__})"
# 单次请求超时下限（毫秒）
MIN_TIMEOUT_MS = 1000


class Config(Protocol):
    """配置接口（使用 Protocol 避免与 Pydantic 字段冲突）"""

    @property
    def base_url(self) -> str:
        """Discord API 基础地址"""
        ...

    @property
    def token_name(self) -> str:
        """令牌网关中的令牌名称"""
        ...

    @property
    def timeout_ms(self) -> int:
        """默认请求超时（毫秒）"""
        ...

    @property
    def user_agent(self) -> str:
        """请求 User-Agent"""
        ...


# 全局配置实例
_config: Optional[Config] = None


def set_config(config: Config) -> None:
    """设置配置实例"""
    global _config
    _config = config


def get_config() -> Config:
    """获取配置实例（未设置时从环境变量创建）"""
    global _config
    if _config is None:
        _config = CLIConfig.from_env()
    return _config


def reset_config() -> None:
    """清除配置实例（测试用）"""
    global _config
    _config = None


class CLIConfig(BaseModel):
    """CLI 配置实现（实现 Config Protocol）

    令牌本身不在此处出现：客户端只知道令牌名称，由令牌网关负责注入。
    """

    base_url: str = DEFAULT_BASE_URL
    token_name: str = "discord"
    timeout_ms: int = 15000
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "ERROR"
    # 令牌记录文件（JSON，{"tokens": {...}}），仅本地令牌网关使用
    permissions_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CLIConfig":
        """从环境变量创建配置

        注意：如果没有提供环境变量，将使用类字段的默认值。
        """
        import os

        config_dict = {}

        base_url_env = os.getenv("DISCORD_CLI_BASE_URL")
        if base_url_env and base_url_env.strip():
            config_dict["base_url"] = base_url_env.strip().rstrip("/")

        token_name_env = os.getenv("DISCORD_CLI_TOKEN_NAME")
        if token_name_env and token_name_env.strip():
            config_dict["token_name"] = token_name_env.strip()

        timeout_env = os.getenv("DISCORD_CLI_TIMEOUT_MS")
        if timeout_env and timeout_env.strip():
            try:
                # 避免过短的超时导致所有请求失败
                config_dict["timeout_ms"] = max(int(timeout_env), MIN_TIMEOUT_MS)
            except ValueError:
                pass  # 使用类默认值

        user_agent_env = os.getenv("DISCORD_CLI_USER_AGENT")
        if user_agent_env and user_agent_env.strip():
            config_dict["user_agent"] = user_agent_env.strip()

        log_level_env = os.getenv("DISCORD_CLI_LOG_LEVEL")
        if log_level_env and log_level_env.strip():
            level = log_level_env.strip().upper()
            try:
                logger.level(level)
                config_dict["log_level"] = level
            except ValueError:
                pass  # loguru 未注册的级别，使用类默认值

        permissions_env = os.getenv("DISCORD_CLI_PERMISSIONS_FILE")
        if permissions_env and permissions_env.strip():
            config_dict["permissions_file"] = permissions_env.strip()

        return cls(**config_dict)
