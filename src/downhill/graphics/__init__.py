"""Frame rendering into numpy buffers."""

from .renderer import SlopeRenderer

__all__ = ["SlopeRenderer"]
