"""渲染交接层：逐轮数据、样式片段与页眉。"""

from devflow_core.rendering.header import Identity, header_text
from devflow_core.rendering.runs import StyledRun, last_code_block, segment_runs
from devflow_core.rendering.turns import RenderedTurn, render_log, render_turn

__all__ = [
    "Identity",
    "RenderedTurn",
    "StyledRun",
    "header_text",
    "last_code_block",
    "render_log",
    "render_turn",
    "segment_runs",
]
