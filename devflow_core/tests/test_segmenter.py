from dataclasses import FrozenInstanceError

import pytest

from devflow_core.domain.segments import (
    BoldSegment,
    CodeSegment,
    HeadingSegment,
    SegmentKind,
    Span,
    TextSegment,
)
from devflow_core.segmentation import segment


def _parts(segments):
    out = []
    for s in segments:
        if isinstance(s, CodeSegment):
            out.append(("code", s.language, s.content))
        else:
            out.append((s.kind.value, s.content))
    return out


SAMPLES = [
    "",
    "plain text",
    "**a** text **b**",
    "### Title\nbody",
    "```\ncode\n```",
    "```js\nfoo",
    "Intro\n```python\nprint('hi')\n```\nOutro **done**",
    "**unterminated bold and ### heading without newline",
    "```\n**not bold** and ### not heading\n```\n### Real\n",
    "a ### b\n**c**\n```x\n\n```",
]

# 捕获内容为空的标记：被消耗但不产生 Segment
EMPTY_MARKUP = [
    ("****", []),
    ("###\n", []),
    ("```\n```", []),
    ("a****b", [("text", "a"), ("text", "b")]),
    ("x ###\ny", [("text", "x "), ("text", "y")]),
    ("```py\n```**b**", [("bold", "b")]),
]


def test_empty_input():
    assert segment("") == []


@pytest.mark.parametrize("raw", ["hello world", "  \n\n  ", "a * b", "## two hashes\n", "``two``", "# one\n"])
def test_plain_text_single_segment(raw):
    assert segment(raw) == [TextSegment(content=raw, span=Span(0, len(raw)))]


def test_code_default_language():
    assert segment("```\ncode\n```") == [
        CodeSegment(language="javascript", content="code", span=Span(0, 12))
    ]


def test_code_with_language_and_surrounding_text():
    raw = "Intro\n```python\nprint('hi')\n```\nOutro"
    assert _parts(segment(raw)) == [
        ("text", "Intro\n"),
        ("code", "python", "print('hi')"),
        ("text", "\nOutro"),
    ]


def test_code_content_is_trimmed():
    assert _parts(segment("```\n\n   x = 1  \n\n```")) == [("code", "javascript", "x = 1")]


def test_code_keeps_inner_backticks():
    raw = "```\na `b` ``c``\n```"
    assert _parts(segment(raw)) == [("code", "javascript", "a `b` ``c``")]


def test_code_is_shortest_span():
    raw = "```a\n1\n```\n```b\n2\n```"
    assert _parts(segment(raw)) == [
        ("code", "a", "1"),
        ("text", "\n"),
        ("code", "b", "2"),
    ]


def test_markup_inside_code_is_not_scanned():
    raw = "```md\n**not bold**\n### not heading\n```"
    assert _parts(segment(raw)) == [("code", "md", "**not bold**\n### not heading")]


def test_non_ascii_language_tag_is_not_a_fence():
    raw = "```café\nx\n```"
    assert segment(raw) == [TextSegment(content=raw, span=Span(0, len(raw)))]


def test_unterminated_fence_falls_through():
    raw = "```js\nfoo"
    assert segment(raw) == [TextSegment(content=raw, span=Span(0, len(raw)))]


def test_unterminated_fence_still_allows_later_bold():
    assert _parts(segment("```js\n**b**")) == [("text", "```js\n"), ("bold", "b")]


def test_non_greedy_bold():
    assert segment("**a** text **b**") == [
        BoldSegment(content="a", span=Span(0, 5)),
        TextSegment(content=" text ", span=Span(5, 11)),
        BoldSegment(content="b", span=Span(11, 16)),
    ]


def test_bold_content_untrimmed():
    assert _parts(segment("** spaced **")) == [("bold", " spaced ")]


def test_bold_shortest_match_leaves_tail():
    assert _parts(segment("**a**b**")) == [("bold", "a"), ("text", "b**")]


def test_unterminated_bold_is_text():
    raw = "start **open and more"
    assert _parts(segment(raw)) == [("text", raw)]


def test_bold_does_not_cross_lines():
    raw = "**a\nb**"
    assert _parts(segment(raw)) == [("text", raw)]


def test_heading_extraction():
    assert segment("### Title\nbody") == [
        HeadingSegment(content="Title", span=Span(0, 10)),
        TextSegment(content="body", span=Span(10, 14)),
    ]


def test_heading_without_line_break_is_text():
    assert _parts(segment("### Title")) == [("text", "### Title")]


def test_heading_marker_mid_line():
    assert _parts(segment("Intro ### Note\nrest")) == [
        ("text", "Intro "),
        ("heading", "Note"),
        ("text", "rest"),
    ]


@pytest.mark.parametrize("raw, expected", EMPTY_MARKUP)
def test_empty_markup_is_consumed_without_segment(raw, expected):
    segments = segment(raw)
    assert _parts(segments) == expected
    assert all(s.content for s in segments)


@pytest.mark.parametrize("raw", [m for m, _ in EMPTY_MARKUP])
def test_spans_skip_only_consumed_markup(raw):
    pos = 0
    skipped = []
    for s in segment(raw):
        assert s.span.start >= pos
        skipped.append(raw[pos:s.span.start])
        pos = s.span.end
    skipped.append(raw[pos:])
    assert "".join(skipped).replace("*", "").replace("#", "").replace("`", "").strip() == ""


def test_whitespace_only_fence_keeps_code_segment():
    assert _parts(segment("```\n  \n```")) == [("code", "javascript", "")]


def test_heading_space_excludes_control_separators():
    assert _parts(segment("###\x1cTitle\n")) == [("heading", "\x1cTitle")]
    assert _parts(segment("###\x85Title\n")) == [("heading", "\x85Title")]
    assert _parts(segment("###\t\xa0Title\n")) == [("heading", "Title")]


def test_mixed_reply():
    raw = "### Setup\nInstall **deps** first:\n```bash\npip install x\n```\nDone."
    assert _parts(segment(raw)) == [
        ("heading", "Setup"),
        ("text", "Install "),
        ("bold", "deps"),
        ("text", " first:\n"),
        ("code", "bash", "pip install x"),
        ("text", "\nDone."),
    ]


@pytest.mark.parametrize("raw", SAMPLES)
def test_spans_reconstruct_input(raw):
    segments = segment(raw)
    assert "".join(s.span.slice(raw) for s in segments) == raw
    pos = 0
    for s in segments:
        assert s.span.start == pos
        assert s.span.end > s.span.start
        pos = s.span.end


@pytest.mark.parametrize("raw", SAMPLES)
def test_no_empty_text_segments(raw):
    assert all(s.content for s in segment(raw) if isinstance(s, TextSegment))


def test_segment_kinds_and_immutability():
    seg = segment("**x**")[0]
    assert seg.kind is SegmentKind.BOLD
    with pytest.raises(FrozenInstanceError):
        seg.content = "y"
