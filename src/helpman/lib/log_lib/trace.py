"""
Function tracing decorator.

Reports calls on the 'trace' channel at level 3 through the module-level
OutputManager.  The channel is opt-in, so ``--show trace:3`` (or -vvv
together with ``--show trace:3``) is needed to see anything.
"""

import functools
import inspect
from pathlib import Path


def _short_repr(value, limit=50):
    """repr() clipped for one-line trace output."""
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > limit:
        return repr(value[:limit - 3] + '...')
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func):
    """Trace entry, exit and exceptions of ``func``."""
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    qualname = func.__qualname__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from .manager import get_output

        out = get_output()
        if not out.channel_active('trace', 3):
            return func(*args, **kwargs)

        shown = [_short_repr(a) for a in args]
        shown += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        out.emit(3, "[TRACE] >> {mod}.{fn}({args})", channel='trace',
                 mod=module_name, fn=qualname, args=', '.join(shown))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            out.emit(3, "[TRACE] !! {mod}.{fn} raised: {exc}: {msg}",
                     channel='trace', mod=module_name, fn=qualname,
                     exc=type(e).__name__, msg=str(e))
            raise
        out.emit(3, "[TRACE] << {mod}.{fn} returned: {val}", channel='trace',
                 mod=module_name, fn=qualname, val=_short_repr(result))
        return result

    return wrapper
