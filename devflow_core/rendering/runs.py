"""Segment 到带样式文本片段的映射。

界面层（tkinter Text 的 tag、终端样式等）只需要按 style 名称上色，
不需要再关心 Segment 的具体类型。
"""

from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from devflow_core.domain.segments import (
    BoldSegment,
    CodeSegment,
    HeadingSegment,
    Segment,
    TextSegment,
)


RunStyle = Literal["text", "bold", "heading", "code"]


@dataclass(frozen=True)
class StyledRun:
    text: str
    style: RunStyle
    language: Optional[str] = None


def segment_run(seg: Segment) -> StyledRun:
    if isinstance(seg, CodeSegment):
        return StyledRun(text=seg.content, style="code", language=seg.language)
    if isinstance(seg, BoldSegment):
        return StyledRun(text=seg.content, style="bold")
    if isinstance(seg, HeadingSegment):
        return StyledRun(text=seg.content, style="heading")
    if isinstance(seg, TextSegment):
        return StyledRun(text=seg.content, style="text")
    raise TypeError(f"Unsupported segment type: {type(seg).__name__}")


def segment_runs(segments: Sequence[Segment]) -> List[StyledRun]:
    return [segment_run(s) for s in segments]


def last_code_block(segments: Sequence[Segment]) -> Optional[CodeSegment]:
    """返回最后一个代码块（用于“复制代码”），没有则返回 None。"""

    for seg in reversed(segments):
        if isinstance(seg, CodeSegment):
            return seg
    return None
