"""Pointer-event contracts for rendered chart output."""

from .interaction import (
    GraphicalElementEventHandler,
    Listener,
    ModifierKeys,
    PointerEvent,
    PointerEventType,
    dispatch_event,
    parse_pointer_event,
    route_events,
)

__all__ = [
    "GraphicalElementEventHandler",
    "Listener",
    "ModifierKeys",
    "PointerEvent",
    "PointerEventType",
    "dispatch_event",
    "parse_pointer_event",
    "route_events",
]
