"""把会话日志转换为渲染层可直接消费的逐轮数据。

- user 轮次：原样文本，不做分段。
- assistant 轮次：调用 segment() 得到 Segment 列表。
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from devflow_core.domain.conversation import ConversationEntry, EntryRole
from devflow_core.domain.segments import Segment
from devflow_core.segmentation import segment


@dataclass(frozen=True)
class RenderedTurn:
    role: EntryRole
    text: Optional[str] = None
    segments: Optional[List[Segment]] = None


def render_turn(entry: ConversationEntry) -> RenderedTurn:
    if entry.role == "assistant":
        return RenderedTurn(role="assistant", segments=segment(entry.content))
    return RenderedTurn(role="user", text=entry.content)


def render_log(entries: Iterable[ConversationEntry]) -> List[RenderedTurn]:
    """按顺序渲染全部记录；接受 ConversationLog 或任意 entry 序列。"""

    return [render_turn(e) for e in entries]
