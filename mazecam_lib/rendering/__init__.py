from .overlay import FrameSink, NullSink, WindowSink, draw_overlay
from .ascii_renderer import ASCIIRenderer

__all__ = ["FrameSink", "NullSink", "WindowSink", "draw_overlay", "ASCIIRenderer"]
