from shclip.viewers.clip_viewer import ClipViewer, FrameInfo

__all__ = [
    "ClipViewer",
    "FrameInfo",
]
