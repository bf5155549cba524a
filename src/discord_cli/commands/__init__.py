"""命令模块

导入即注册：每个命令模块在导入时调用 register_command()，
注册顺序即帮助信息中的显示顺序。
"""

from . import send, embed, messages, users, channels, help  # noqa: F401
