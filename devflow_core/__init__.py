"""DevFlow Core 顶层包。

该包提供 DevFlow IA 聊天前端的核心实现：
助手回复分段器、只追加的会话日志、OpenRouter Provider 适配、
会话服务、渲染交接层以及 tkinter 聊天窗口。
"""

from devflow_core.domain.conversation import ConversationEntry, ConversationLog
from devflow_core.segmentation import segment

__all__ = ["ConversationEntry", "ConversationLog", "segment"]
