"""助手回复的分段模型。

一条模型回复会被分段器拆成有序的 Segment 列表，每种 Segment 都是一个
不可变 dataclass，渲染层按类型做穷尽分发：

- TextSegment: 普通文本，原样保留空白。
- CodeSegment: ``` 围栏代码块，带语言标识。
- BoldSegment: **加粗** 片段。
- HeadingSegment: ### 标题行。

所有 Segment 都带有 span，指向原始回复中完整匹配的区间（含标记符），
按顺序拼接这些区间即可还原原文；唯一例外是捕获内容为空的标记
（****、###\\n、```\\n```），它们被分段器消耗而不产生 Segment。
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


DEFAULT_CODE_LANGUAGE = "javascript"


class SegmentKind(str, Enum):
    TEXT = "text"
    CODE = "code"
    BOLD = "bold"
    HEADING = "heading"


@dataclass(frozen=True)
class Span:
    start: int
    end: int  # 不包含

    def slice(self, source: str) -> str:
        return source[self.start:self.end]


@dataclass(frozen=True)
class TextSegment:
    content: str
    span: Span
    kind: ClassVar[SegmentKind] = SegmentKind.TEXT


@dataclass(frozen=True)
class CodeSegment:
    """围栏代码块。content 已去除首尾空白，language 缺省为 javascript。"""

    language: str
    content: str
    span: Span
    kind: ClassVar[SegmentKind] = SegmentKind.CODE


@dataclass(frozen=True)
class BoldSegment:
    content: str
    span: Span
    kind: ClassVar[SegmentKind] = SegmentKind.BOLD


@dataclass(frozen=True)
class HeadingSegment:
    content: str
    span: Span
    kind: ClassVar[SegmentKind] = SegmentKind.HEADING


Segment = Union[TextSegment, CodeSegment, BoldSegment, HeadingSegment]
