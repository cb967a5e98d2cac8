"""Inbound command layer: key and paste events to buffer operations."""

from .actions import normalize_paste
from .dispatcher import CommandDispatcher, KeyAction, default_key_actions
from .models import CommandResult, KeyInput

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "KeyAction",
    "KeyInput",
    "default_key_actions",
    "normalize_paste",
]
