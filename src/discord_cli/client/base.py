"""令牌网关接口定义

令牌网关由宿主提供：客户端只能询问某个令牌是否已配置，
以及通过网关发起带令牌的请求，永远看不到令牌本身。
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class FetchResponse(Protocol):
    """网关返回的响应"""

    @property
    def ok(self) -> bool:
        """状态码是否为 2xx"""
        ...

    @property
    def status(self) -> int:
        """HTTP 状态码"""
        ...

    def json(self) -> Any:
        """解析响应体为 JSON"""
        ...


@runtime_checkable
class CredentialGate(Protocol):
    """令牌网关接口"""

    def has_token(self, name: str) -> bool:
        """令牌是否已配置"""
        ...

    async def authenticated_fetch(
        self,
        name: str,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
        timeout: int = 15000,
    ) -> FetchResponse:
        """发起带令牌的请求

        Args:
            name: 令牌名称
            url: 完整请求地址
            method: HTTP 方法
            headers: 请求头（不含认证头，由网关注入）
            body: 已序列化的请求体
            timeout: 超时（毫秒）
        """
        ...


def is_gate_available(gate: Any) -> bool:
    """检查网关对象是否提供了两个必需的能力"""
    if gate is None:
        return False
    return callable(getattr(gate, "has_token", None)) and callable(
        getattr(gate, "authenticated_fetch", None)
    )
