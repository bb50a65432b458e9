"""助手回复分段器。

把一条模型回复拆分为有序的 Segment 列表。识别三种结构：

1. ``` 围栏代码块：```lang\\n ... ```，lang 可省略（缺省 javascript）。
2. **加粗**：最短匹配，不跨行。
3. ### 标题：### 之后到换行符为止，换行符被消耗但不计入内容。

单次从左到右扫描：每一步取三种结构中起点最靠前的匹配，
起点相同时优先级为 代码块 > 加粗 > 标题。匹配区间内部不再扫描，
两个匹配之间的文本作为 TextSegment 输出（空则跳过）。
捕获内容为空的标记（如 ****、###\\n、```\\n```）被整体消耗，不产生任何 Segment。

segment() 是纯函数，对任意字符串都不会抛异常：未闭合的代码块、
缺少结尾的 ** 以及没有换行的标题都会原样降级为普通文本。
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from devflow_core.domain.segments import (
    DEFAULT_CODE_LANGUAGE,
    BoldSegment,
    CodeSegment,
    HeadingSegment,
    Segment,
    Span,
    TextSegment,
)


# 加粗与标题内容不跨越任何行终止符
_LINE_CHAR = r"[^\n\r\u2028\u2029]"
# 标题标记后的空白：显式列出字符集，不使用 Python 的 Unicode \s（其中包含 \x1c-\x1f 与 \x85）
_HEADING_SPACE = r"[ \t\n\v\f\r\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

CODE_FENCE_RE = re.compile(r"```([A-Za-z0-9_]+)?\n([\s\S]*?)```")
BOLD_RE = re.compile(r"\*\*(" + _LINE_CHAR + r"*?)\*\*")
HEADING_RE = re.compile(r"###" + _HEADING_SPACE + r"*(" + _LINE_CHAR + r"*?)\n")


def _build_code(m: "re.Match[str]") -> Optional[Segment]:
    # 只含空白的代码块仍然输出，去空白后内容为空串
    if not m.group(2):
        return None
    return CodeSegment(
        language=m.group(1) or DEFAULT_CODE_LANGUAGE,
        content=m.group(2).strip(),
        span=Span(m.start(), m.end()),
    )


def _build_bold(m: "re.Match[str]") -> Optional[Segment]:
    if not m.group(1):
        return None
    return BoldSegment(content=m.group(1), span=Span(m.start(), m.end()))


def _build_heading(m: "re.Match[str]") -> Optional[Segment]:
    if not m.group(1):
        return None
    return HeadingSegment(content=m.group(1), span=Span(m.start(), m.end()))


# 顺序即同起点时的优先级
_RULES: Sequence[Tuple["re.Pattern[str]", Callable[["re.Match[str]"], Optional[Segment]]]] = (
    (CODE_FENCE_RE, _build_code),
    (BOLD_RE, _build_bold),
    (HEADING_RE, _build_heading),
)


def segment(raw: str) -> List[Segment]:
    """把原始回复拆分为 Segment 列表。

    空字符串返回空列表；没有任何标记的文本返回单个 TextSegment。
    """

    if not raw:
        return []

    segments: List[Segment] = []
    pos = 0
    # 每条规则在 pos 之后的下一个匹配；只有当缓存的匹配落在 pos 之前时才重新搜索
    upcoming: List[Optional["re.Match[str]"]] = [pattern.search(raw) for pattern, _ in _RULES]

    while True:
        for i, (pattern, _) in enumerate(_RULES):
            m = upcoming[i]
            if m is not None and m.start() < pos:
                upcoming[i] = pattern.search(raw, pos)

        candidates = [(m.start(), i) for i, m in enumerate(upcoming) if m is not None]
        if not candidates:
            break
        start, rule_index = min(candidates)
        match = upcoming[rule_index]

        if start > pos:
            segments.append(TextSegment(content=raw[pos:start], span=Span(pos, start)))
        built = _RULES[rule_index][1](match)
        if built is not None:
            segments.append(built)
        pos = match.end()

    if pos < len(raw):
        segments.append(TextSegment(content=raw[pos:], span=Span(pos, len(raw))))
    return segments
