"""助手回复分段。"""

from devflow_core.segmentation.segmenter import segment

__all__ = ["segment"]
