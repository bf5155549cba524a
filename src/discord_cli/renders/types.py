"""渲染相关类型

ShapeKind 是响应 JSON 的形状分类，由 summary.classify_shape 一次性判定，
渲染时只按分类分派，不再重复检查字段。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ShapeKind(Enum):
    """响应形状（按判定优先级排列）"""

    EMPTY_LIST = "empty_list"
    MESSAGE_LIST = "message_list"
    GUILD_LIST = "guild_list"
    CHANNEL_LIST = "channel_list"
    GENERIC_LIST = "generic_list"
    USER = "user"
    CHANNEL = "channel"
    DM_CHANNEL = "dm_channel"
    GENERIC_OBJECT = "generic_object"
    UNKNOWN = "unknown"


# 频道列表使用的完整类型表（缺失的编号显示为 "Type {n}"）
CHANNEL_TYPE_NAMES: Dict[int, str] = {
    0: "Text",
    1: "DM",
    2: "Voice",
    3: "Group DM",
    4: "Category",
    5: "Announcement",
    6: "Store",
    10: "News",
    11: "Store",
    13: "Stage Voice",
    14: "Directory",
    15: "Forum",
}

# 单个频道对象使用的简表
SHORT_CHANNEL_TYPE_NAMES: Dict[int, str] = {
    0: "Text",
    1: "DM",
    2: "Voice",
    3: "Group DM",
    4: "Category",
    5: "Announcement",
}

# channels --summary 中列出的频道类型（文本、公告）
LISTED_CHANNEL_TYPES = (0, 5)
MAX_CHANNELS_PER_GUILD = 5


@dataclass
class GuildChannels:
    """channels --summary 中一个服务器的渲染数据"""

    guild: Dict[str, Any]
    channels: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None  # 获取频道失败时的错误信息
