"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "Checklist",
    "ChecklistEntry",
    "ChecklistService",
    "DecklistReport",
    "DecklistService",
    "StapleService",
    "merge_staples",
]

_LAZY_MODULES = {
    "Checklist": "services.checklist_service",
    "ChecklistEntry": "services.checklist_service",
    "ChecklistService": "services.checklist_service",
    "DecklistReport": "services.decklist_service",
    "DecklistService": "services.decklist_service",
    "StapleService": "services.staple_service",
    "merge_staples": "services.staple_service",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")
