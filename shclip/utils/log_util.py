import functools
import inspect
import logging
import time
from typing import Any, Callable


logger = logging.getLogger("shclip")

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_MAX_REPR = 120


def _safe_repr(x, maxlen=_MAX_REPR):
    """repr() that never raises. Long lists and tuples (vertex arrays) are summarized."""
    if isinstance(x, (list, tuple)) and len(x) > 8:
        head = ", ".join(_safe_repr(v, 24) for v in x[:4])
        return f"<{type(x).__name__} len={len(x)} [{head}, ...]>"
    try:
        r = repr(x)
    except Exception:
        r = "<repr error>"
    if len(r) > maxlen:
        r = r[:maxlen] + "..."
    return r


def _format_call(sig: inspect.Signature, args, kwargs, mask) -> str:
    try:
        bound = sig.bind_partial(*args, **kwargs)
    except TypeError:
        # the call itself will fail and be logged below
        return ", ".join(_safe_repr(a) for a in args)
    parts = []
    for name, value in bound.arguments.items():
        if name in ("self", "cls"):
            continue
        parts.append(f"{name}={'***' if name in mask else _safe_repr(value)}")
    return ", ".join(parts)


def log_io(level: int = logging.DEBUG, mask: tuple[str, ...] = ()):
    """
    Log a function's arguments, result and duration on the "shclip" logger.
    Arguments named in mask are logged as ***.
    :param level: log level of the records.
    :param mask: argument names whose values are hidden.
    :return: decorator
    """
    def deco(func: Callable):
        qualname = f"{func.__module__}.{func.__qualname__}"
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            enabled = logger.isEnabledFor(level)
            if enabled:
                logger.log(level, "-> %s(%s)", qualname, _format_call(sig, args, kwargs, mask))

            t0 = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if enabled:
                dt = (time.perf_counter() - t0) * 1000.0
                logger.log(level, "<- %s [%0.1f ms] = %s", qualname, dt, _safe_repr(result))
            return result
        return wrapper
    return deco


def level_from_name(value: Any, default: int = logging.INFO) -> int:
    """
    Normalize a level name or number to a logging level.
    Unknown values fall back to default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.isdigit():
            return int(s)
        name = s.upper()
        if name in _VALID_LEVELS:
            return getattr(logging, name)
    return default
