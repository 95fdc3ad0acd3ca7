from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class StatusField:
    """
    A status bar field: a label, a value and how to format the value.

    :ivar label: The label shown before the value.
    :ivar fmt: Format string used when no formatter is given.
    :ivar formatter: Callable turning the value into text.
    :ivar value: Current value.
    """
    label: str
    fmt: str = "{}"
    formatter: Callable[[Any], str] = None
    value: Any = None

    def __post_init__(self):
        if self.formatter is None:
            self.formatter = lambda v, fmt=self.fmt: fmt.format(v)

    def text(self) -> str:
        if self.value is None:
            return f"{self.label}: -"
        return f"{self.label}: {self.formatter(self.value)}"


def format_mode(show_clipped: bool) -> str:
    return "clipped" if show_clipped else "original"


# To add a field, add it here and update it from the viewer's render_frame.
STATUS_FIELDS = {
    "mode": StatusField(label="Mode", formatter=format_mode),
    "vertex_count": StatusField(label="Vertices", fmt="{:d}"),
    "viewport": StatusField(label="Viewport"),
    "clip_rect": StatusField(label="Clip"),
}
