"""
Process-level configuration properties.

A small, thread-safe key/value store for settings that belong to the
process rather than its environment (``tracer.class`` being the one the
resolver reads). Values can be set programmatically or parsed from
``-Dkey=value`` command-line items.
"""

import threading
from typing import Dict, Iterable, List, Optional

_properties: Dict[str, str] = {}
_lock = threading.Lock()


def get_property(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get a process property, or ``default`` if it is not set."""
    with _lock:
        return _properties.get(name, default)


def set_property(name: str, value: str) -> None:
    """Set a process property."""
    if not name:
        raise ValueError("Property name must not be empty")
    with _lock:
        _properties[name] = value


def clear_property(name: str) -> Optional[str]:
    """Remove a process property, returning its previous value."""
    with _lock:
        return _properties.pop(name, None)


def get_properties() -> Dict[str, str]:
    """Snapshot of all process properties."""
    with _lock:
        return dict(_properties)


def load_properties(argv: Iterable[str]) -> List[str]:
    """
    Set properties from ``-Dkey=value`` items.

    ``-Dkey`` without a value sets the property to an empty string. Items
    with no property name (``-D`` or ``-D=value``) are passed through.

    Returns:
        The items that were not property definitions, in order
    """
    remaining = []
    for item in argv:
        name, _, value = item[2:].partition("=")
        if not item.startswith("-D") or not name:
            remaining.append(item)
            continue

        set_property(name, value)

    return remaining
