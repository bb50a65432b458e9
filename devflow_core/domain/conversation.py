"""会话日志模型。

ConversationLog 是一次会话内按顺序追加的消息记录：

- 只能追加，已追加的 ConversationEntry 不会被修改或删除；
- 用户输入为空白时直接忽略（no-op），不会产生记录；
- 追加操作在锁内完成，多线程写入时仍保持插入顺序。

会话结束即丢弃，不做持久化。
"""

import threading
from dataclasses import dataclass
from typing import Iterator, List, Literal, Optional, Tuple

from devflow_core.infrastructure.logging.logger import logger


EntryRole = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationEntry:
    role: EntryRole
    content: str


class ConversationLog:
    def __init__(self) -> None:
        self._entries: List[ConversationEntry] = []
        self._lock = threading.Lock()

    def append_user(self, text: str) -> Optional[ConversationEntry]:
        """追加一条用户消息；空白输入被拒绝并返回 None。"""

        if not text or not text.strip():
            logger.info("conversation.empty_submission")
            return None
        return self._append(ConversationEntry(role="user", content=text))

    def append_assistant(self, text: str) -> ConversationEntry:
        """追加模型原始回复，内容不做任何修改。"""

        return self._append(ConversationEntry(role="assistant", content=text))

    def entries(self) -> Tuple[ConversationEntry, ...]:
        """按追加顺序返回只读快照。"""

        with self._lock:
            return tuple(self._entries)

    def _append(self, entry: ConversationEntry) -> ConversationEntry:
        with self._lock:
            self._entries.append(entry)
            position = len(self._entries)
        logger.info(
            "conversation.append",
            extra={"extra": {"role": entry.role, "position": position, "chars": len(entry.content)}},
        )
        return entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[ConversationEntry]:
        return iter(self.entries())
