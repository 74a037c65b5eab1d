from .presenter import render_event_line

__all__ = ["render_event_line"]
