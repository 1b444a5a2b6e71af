"""
Process-wide default uniform source.

Created lazily from the configured seed (config.yaml or VARIATES_SEED). The
source hands each thread its own engine, so samplers built without an explicit
source can live in different threads.
"""

import threading

from .config import load_settings
from .sources.uniform_source import ThreadLocalSource

_default_source: ThreadLocalSource | None = None
_lock = threading.Lock()


def get_default_seed() -> int | None:
    """Seed for the default source: VARIATES_SEED env, then config.yaml, else None."""
    return load_settings().seed


def get_default_source() -> ThreadLocalSource:
    """Return the shared default source, creating it on first use."""
    global _default_source
    if _default_source is None:
        with _lock:
            if _default_source is None:
                _default_source = ThreadLocalSource(get_default_seed())
    return _default_source


def set_default_source(source: ThreadLocalSource | None) -> None:
    """Replace the shared default source. None forces re-creation from config."""
    global _default_source
    with _lock:
        _default_source = source
