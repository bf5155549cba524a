"""Discord REST 客户端

每个 Discord 端点对应一个方法，所有方法都通过 request() 经令牌网关发送。
必需的 ID 在本地校验，缺失时直接抛出 ValidationError，不发起网络请求。
"""

import json
import time
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Dict, List, Optional

from loguru import logger

from ..config import Config, get_config
from .base import CredentialGate, is_gate_available
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

# Discord 消息 flags：SUPPRESS_NOTIFICATIONS
SILENT_FLAG = 16

CHANNEL_REQUIRED = "Channel ID is required. Use --channel option."


def build_remediation(token_name: str, spec: Optional[Dict[str, Any]] = None) -> str:
    """构建令牌未配置时的修复说明"""
    record = spec or {
        "env": "DISCORD_TOKEN",
        "type": "api_key",
        "domains": ["discord.com", "*.discord.com"],
        "placement": {
            "type": "header",
            "name": "Authorization",
            "format": "Bot {token}",
        },
    }
    return "\n".join(
        [
            "Add a token record to your permissions file:",
            json.dumps({"tokens": {token_name: record}}, indent=2),
            "",
            "Then set environment variable:",
            f"  {record['env']}=your_bot_token",
        ]
    )


def embed_timestamp() -> str:
    """当前 UTC 时间的 ISO-8601 字符串（毫秒精度，Z 结尾）"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _nonce() -> str:
    return str(int(time.time() * 1000))


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value)


class DiscordClient:
    """Discord REST API 客户端

    令牌网关通过构造函数注入，客户端本身从不接触令牌。
    """

    def __init__(self, gate: Optional[CredentialGate], config: Optional[Config] = None):
        """初始化 DiscordClient

        Args:
            gate: 令牌网关（实现 has_token / authenticated_fetch）
            config: 配置对象，默认使用全局配置
        """
        self.gate = gate
        self.config = config or get_config()
        self.base_url: str = self.config.base_url
        self._token_checked = False

    def check_token(self) -> None:
        """检查令牌网关可用且令牌已配置（成功后缓存结果）

        Raises:
            ConfigurationError: 网关不可用或令牌未配置
        """
        if self._token_checked:
            return

        if not is_gate_available(self.gate):
            raise ConfigurationError(
                "Secure token system not available. "
                "Make sure a credential gate is configured for this client."
            )

        token_name = self.config.token_name
        if not self.gate.has_token(token_name):
            spec = None
            specs = getattr(self.gate, "specs", None)
            if isinstance(specs, dict) and token_name in specs:
                record = specs[token_name]
                spec = record.model_dump() if hasattr(record, "model_dump") else None
            raise ConfigurationError(
                "Discord token not configured",
                remediation=build_remediation(token_name, spec),
            )

        self._token_checked = True

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> Any:
        """通过令牌网关发送请求

        Args:
            endpoint: 以 / 开头的 API 路径（可带查询串）
            method: HTTP 方法
            body: JSON 请求体
            headers: 额外请求头（后写覆盖默认值）
            timeout: 超时（毫秒），默认取配置

        Returns:
            解析后的 JSON 响应

        Raises:
            ConfigurationError: 令牌不可用
            ApiError: 非 2xx 响应
            TransportError: 网络错误或超时
        """
        self.check_token()

        url = f"{self.base_url}{endpoint}"
        request_headers = {
            "Accept": "*/*",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
            **(headers or {}),
        }
        logger.debug(f"Discord API request: {method} {endpoint}")

        try:
            response = await self.gate.authenticated_fetch(
                self.config.token_name,
                url,
                method=method,
                headers=request_headers,
                body=json.dumps(body) if body is not None else None,
                timeout=timeout or self.config.timeout_ms,
            )
        except DiscordCLIError as e:
            if "Token not found" in e.message:
                raise self._token_not_found() from e
            raise
        except CredentialError as e:
            if "Token not found" in str(e):
                raise self._token_not_found() from e
            raise ConfigurationError(str(e)) from e
        except Exception as e:
            # 第三方网关抛出的任意异常统一视为传输错误
            if "Token not found" in str(e):
                raise self._token_not_found() from e
            raise TransportError(str(e) or type(e).__name__) from e

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None
            message = None
            if isinstance(error_data, dict):
                message = error_data.get("message")
            logger.warning(
                f"Discord API error: {method} {endpoint} -> {response.status}"
            )
            raise ApiError(
                message or f"HTTP {response.status}",
                status=response.status,
                data=error_data,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.warning(
                f"Discord API returned invalid JSON: {method} {endpoint} -> {response.status}"
            )
            raise ApiError(
                f"Invalid JSON response (HTTP {response.status})",
                status=response.status,
            ) from e

    @staticmethod
    def _token_not_found() -> ConfigurationError:
        return ConfigurationError(
            "Discord token not found. Please configure the secure token system."
        )

    async def send_message(
        self, content: str, options: Optional[MessageOptions] = None
    ) -> Any:
        """发送文本消息到频道"""
        options = options or MessageOptions()
        channel_id = _require(options.channel_id, CHANNEL_REQUIRED)

        body: Dict[str, Any] = {
            "content": content,
            "nonce": _nonce(),
            "tts": bool(options.tts),
            "mobile_network_type": "unknown",
        }
        if options.silent is not False:
            body["flags"] = SILENT_FLAG

        return await self.request(
            f"/channels/{channel_id}/messages", method="POST", body=body
        )

    async def send_embed(
        self, embed: Dict[str, Any], options: Optional[MessageOptions] = None
    ) -> Any:
        """发送 embed 消息

        Args:
            embed: embed 对象，除 timestamp 外至少要有一个字段
            options: 频道、附带文本、是否静默
        """
        options = options or MessageOptions()
        channel_id = _require(options.channel_id, CHANNEL_REQUIRED)

        if not any(key != "timestamp" for key in embed):
            raise ValidationError(
                "At least one embed property (title, description, etc.) is required"
            )

        body: Dict[str, Any] = {
            "embeds": [embed],
            "nonce": _nonce(),
            "tts": False,
            "mobile_network_type": "unknown",
        }
        if options.content:
            body["content"] = options.content
        if options.silent is not False:
            body["flags"] = SILENT_FLAG

        return await self.request(
            f"/channels/{channel_id}/messages", method="POST", body=body
        )

    async def get_messages(
        self, channel_id: Optional[str], query: Optional[MessageQuery] = None
    ) -> Any:
        """获取频道消息历史"""
        channel_id = _require(channel_id, CHANNEL_REQUIRED)
        query = query or MessageQuery()

        # 参数顺序固定为 limit, before, after；缺失的参数不出现
        params = []
        if query.limit:
            params.append(f"limit={query.limit}")
        if query.before:
            params.append(f"before={query.before}")
        if query.after:
            params.append(f"after={query.after}")

        query_string = f"?{'&'.join(params)}" if params else ""
        return await self.request(f"/channels/{channel_id}/messages{query_string}")

    async def get_channel(self, channel_id: Optional[str]) -> Any:
        """获取频道信息"""
        channel_id = _require(channel_id, CHANNEL_REQUIRED)
        return await self.request(f"/channels/{channel_id}")

    async def get_current_user(self) -> Any:
        """获取当前 Bot 用户信息"""
        return await self.request("/users/@me")

    async def create_dm_channel(self, user_id: Optional[str]) -> Any:
        """创建或获取与用户的私信频道"""
        user_id = _require(user_id, "User ID is required")
        return await self.request(
            "/users/@me/channels", method="POST", body={"recipient_id": user_id}
        )

    async def get_guilds(self) -> Any:
        """获取 Bot 所在的服务器列表"""
        return await self.request("/users/@me/guilds")

    async def get_guild_channels(self, guild_id: Optional[str]) -> Any:
        """获取服务器的频道列表"""
        guild_id = _require(guild_id, "Guild ID is required")
        return await self.request(f"/guilds/{guild_id}/channels")

    async def send_file(
        self, file_path: str, options: Optional[MessageOptions] = None
    ) -> Any:
        """发送文件（简化实现）

        令牌网关暂不支持 multipart 请求体，这里只发送一条包含文件名的文本消息，
        不读取也不传输文件内容。
        """
        file_path = _require(file_path, "File path is required")
        options = options or MessageOptions()
        filename = PurePath(file_path).name

        if options.content:
            message = f"{options.content}\n📎 File: {filename}"
        else:
            message = f"📎 File upload: {filename}"

        logger.debug(f"Sending text-only notice for file {filename}")
        return await self.send_message(
            message,
            MessageOptions(channel_id=options.channel_id, silent=options.silent),
        )

    async def send_message_with_files(
        self, files: List[FileAttachment], options: Optional[MessageOptions] = None
    ) -> Any:
        """发送带附件的消息

        Raises:
            UnsupportedFeatureError: 总是抛出，令牌网关尚不支持 multipart 请求体
        """
        options = options or MessageOptions()
        _require(options.channel_id, "Channel ID is required.")
        if not files:
            raise ValidationError("At least one file is required")

        raise UnsupportedFeatureError(
            "File uploads are not yet fully implemented in the secure token system. "
            "Please use the basic send command instead."
        )
