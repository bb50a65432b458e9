import pytest

from devflow_core.domain.conversation import ConversationEntry, ConversationLog
from devflow_core.rendering import (
    Identity,
    StyledRun,
    header_text,
    last_code_block,
    render_log,
    segment_runs,
)
from devflow_core.segmentation import segment


def test_segment_runs_cover_every_kind():
    raw = "### H\nsome **b**\n```go\nfmt.Println()\n```"
    assert segment_runs(segment(raw)) == [
        StyledRun(text="H", style="heading"),
        StyledRun(text="some ", style="text"),
        StyledRun(text="b", style="bold"),
        StyledRun(text="\n", style="text"),
        StyledRun(text="fmt.Println()", style="code", language="go"),
    ]


def test_segment_runs_rejects_unknown_type():
    with pytest.raises(TypeError):
        segment_runs(["not a segment"])


def test_last_code_block():
    segments = segment("```a\n1\n```\ntext\n```b\n2\n```\ntail")
    assert last_code_block(segments).content == "2"
    assert last_code_block(segment("no code")) is None


def test_render_log_accepts_conversation_log():
    log = ConversationLog()
    log.append_user("### keep")
    log.append_assistant("### Title\n")
    turns = render_log(log)
    assert turns[0].text == "### keep"
    assert [s.content for s in turns[1].segments] == ["Title"]


def test_render_log_from_entries():
    turns = render_log([ConversationEntry(role="assistant", content="")])
    assert turns[0].segments == []


def test_header_text():
    assert header_text(None, title="DevFlow IA") == "DevFlow IA | Login"
    assert header_text(Identity(), title="DevFlow IA") == "DevFlow IA | Login"
    ident = Identity(email="ana@example.com", display_name="Ana")
    assert header_text(ident, title="DevFlow IA") == "DevFlow IA | Ana <ana@example.com>"


def test_identity_without_display_name():
    ident = Identity(email="x@example.com")
    assert ident.name == "Sin nombre"
    assert ident.initial == "S"
