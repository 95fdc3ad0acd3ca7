"""shclip - Sutherland-Hodgeman polygon clipping with a PySide6/VTK viewer."""

__version__ = "0.1.0"
