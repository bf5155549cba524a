"""Discord 客户端参数类型

用于 discord_client.py 中的函数参数。
这些是临时参数类型，每次调用构造一次，不在调用之间保留。
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class MessageOptions:
    """发送消息参数"""

    channel_id: Optional[str] = None
    tts: bool = False
    # 默认静默发送（flags=16），只有显式传 False 才发送通知
    silent: bool = True
    content: Optional[str] = None


@dataclass
class MessageQuery:
    """消息历史查询参数"""

    limit: Optional[Union[int, str]] = None
    before: Optional[str] = None
    after: Optional[str] = None


@dataclass
class FileAttachment:
    """待上传文件（仅用于尚未支持的多文件上传入口）"""

    name: str
    data: bytes
