"""Session state utilities."""

from __future__ import annotations

import importlib
from typing import Any

__all__ = ["ensure_form_state", "get_form_session", "reset_form_state"]


def __getattr__(name: str) -> Any:
    """Load the session helpers lazily; they import :mod:`wizard`, which imports this package."""

    if name in __all__:
        module = importlib.import_module(f"{__name__}.ensure_state")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__} has no attribute {name}")
