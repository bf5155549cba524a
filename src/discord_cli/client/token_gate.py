"""本地令牌网关

在没有宿主沙箱的环境中充当令牌网关：从环境变量读取令牌，
校验目标域名是否在允许列表中，并按模板把令牌注入请求头。
调用方（DiscordClient）只通过 CredentialGate 接口访问它。
"""

import json
import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import ConfigurationError, CredentialError, TransportError


class TokenPlacement(BaseModel):
    """令牌注入位置"""

    type: str = "header"
    name: str = "Authorization"
    format: str = "{token}"


class TokenSpec(BaseModel):
    """单个令牌记录"""

    env: str
    type: str = "api_key"
    domains: List[str] = []
    placement: TokenPlacement = TokenPlacement()


DEFAULT_TOKEN_SPECS: Dict[str, TokenSpec] = {
    "discord": TokenSpec(
        env="DISCORD_TOKEN",
        type="api_key",
        domains=["discord.com", "*.discord.com"],
        placement=TokenPlacement(
            type="header", name="Authorization", format="Bot {token}"
        ),
    )
}


def load_token_specs(path: Optional[str] = None) -> Dict[str, TokenSpec]:
    """加载令牌记录

    Args:
        path: JSON 文件路径，内容形如 {"tokens": {"discord": {...}}}；
              为空时使用默认记录

    Returns:
        令牌名称到 TokenSpec 的映射（文件中的记录覆盖默认记录）
    """
    specs = dict(DEFAULT_TOKEN_SPECS)
    if not path:
        return specs

    try:
        raw = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read permissions file {path}: {e}") from e

    tokens = raw.get("tokens", {}) if isinstance(raw, dict) else {}
    for name, record in tokens.items():
        try:
            specs[name] = TokenSpec.model_validate(record)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid token record '{name}' in {path}: {e}"
            ) from e
    return specs


class HttpxFetchResponse:
    """把 httpx.Response 适配为 FetchResponse"""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status(self) -> int:
        return self._response.status_code

    def json(self) -> Any:
        return self._response.json()


class LocalTokenGate:
    """基于环境变量的令牌网关（实现 CredentialGate 接口）"""

    def __init__(
        self,
        specs: Optional[Dict[str, TokenSpec]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """初始化 LocalTokenGate

        Args:
            specs: 令牌记录，默认使用 DEFAULT_TOKEN_SPECS
            transport: httpx 传输层（测试时注入 MockTransport）
            environ: 环境变量映射，默认 os.environ
        """
        self.specs = specs if specs is not None else dict(DEFAULT_TOKEN_SPECS)
        self._transport = transport
        self._environ = environ if environ is not None else os.environ

    def _resolve_token(self, name: str) -> Optional[str]:
        spec = self.specs.get(name)
        if spec is None:
            return None
        token = self._environ.get(spec.env, "")
        return token.strip() or None

    def has_token(self, name: str) -> bool:
        return self._resolve_token(name) is not None

    def _check_domain(self, spec: TokenSpec, url: str) -> None:
        host = urlsplit(url).hostname or ""
        if not any(fnmatch(host, pattern) for pattern in spec.domains):
            raise CredentialError(
                f"Domain {host} is not allowed for this token "
                f"(allowed: {', '.join(spec.domains)})"
            )

    def _inject(self, spec: TokenSpec, token: str, headers: Dict[str, str]) -> None:
        if spec.placement.type != "header":
            raise CredentialError(
                f"Unsupported token placement: {spec.placement.type}"
            )
        headers[spec.placement.name] = spec.placement.format.replace("{token}", token)

    async def authenticated_fetch(
        self,
        name: str,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        timeout: int = 15000,
    ) -> HttpxFetchResponse:
        """发起带令牌的请求

        Raises:
            CredentialError: 令牌不存在或域名不在允许列表中
            TransportError: 网络错误或超时
        """
        spec = self.specs.get(name)
        token = self._resolve_token(name)
        if spec is None or token is None:
            raise CredentialError(f"Token not found: {name}")

        self._check_domain(spec, url)

        request_headers = dict(headers or {})
        self._inject(spec, token, request_headers)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=request_headers,
                    content=body,
                    timeout=timeout / 1000.0,
                )
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout requesting {method} {url}")
            raise TransportError(f"Request timed out after {timeout}ms") from e
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error requesting {method} {url}: {e}")
            raise TransportError(f"Network error: {e}") from e

        return HttpxFetchResponse(response)
