from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Mapping, Protocol, Sequence

from chartvec_ui.scene import Selectable


PointerEventType = Literal["click", "mouseenter", "mouseleave"]

POINTER_EVENT_TYPES: tuple[PointerEventType, ...] = ("click", "mouseenter", "mouseleave")


@dataclass(frozen=True)
class ModifierKeys:
    """Modifier-key state forwarded to selection handlers."""

    shift_key: bool = False
    ctrl_key: bool = False
    meta_key: bool = False


@dataclass
class PointerEvent:
    """Minimal pointer event contract consumed by output-node listeners."""

    event_type: PointerEventType
    modifiers: ModifierKeys = field(default_factory=ModifierKeys)
    propagation_stopped: bool = field(default=False, init=False)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


GraphicalElementEventHandler = Callable[[Selectable | None, ModifierKeys], object]
Listener = Callable[[PointerEvent], None]


class ListenerTarget(Protocol):
    listeners: Mapping[str, Listener]


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse a raw host pointer event into a typed `PointerEvent`.

    Accepts both DOM-style (`shiftKey`) and snake_case (`shift_key`) modifier
    names. Unknown event types and non-mapping payloads return None.
    """

    if event_type not in POINTER_EVENT_TYPES or not isinstance(payload, Mapping):
        return None
    modifiers = ModifierKeys(
        shift_key=bool(payload.get("shiftKey", payload.get("shift_key", False))),
        ctrl_key=bool(payload.get("ctrlKey", payload.get("ctrl_key", False))),
        meta_key=bool(payload.get("metaKey", payload.get("meta_key", False))),
    )
    return PointerEvent(event_type=event_type, modifiers=modifiers)


def route_events(
    selectable: Selectable | None,
    *,
    on_click: GraphicalElementEventHandler | None = None,
    on_mouse_enter: GraphicalElementEventHandler | None = None,
    on_mouse_leave: GraphicalElementEventHandler | None = None,
) -> dict[str, Listener]:
    """Wrap semantic selection handlers as output-node listeners.

    Only registered handlers get a listener. Click stops propagation before
    the handler runs so enclosing groups do not also report the click.
    """

    listeners: dict[str, Listener] = {}
    if on_click is not None:
        def _click(event: PointerEvent) -> None:
            event.stop_propagation()
            on_click(selectable, event.modifiers)

        listeners["click"] = _click
    if on_mouse_enter is not None:
        def _enter(event: PointerEvent) -> None:
            on_mouse_enter(selectable, event.modifiers)

        listeners["mouseenter"] = _enter
    if on_mouse_leave is not None:
        def _leave(event: PointerEvent) -> None:
            on_mouse_leave(selectable, event.modifiers)

        listeners["mouseleave"] = _leave
    return listeners


def dispatch_event(path: Sequence[ListenerTarget], event: PointerEvent) -> int:
    """Bubble `event` from the innermost target (last in `path`) outward.

    Returns the number of listeners invoked.
    """

    invoked = 0
    for target in reversed(path):
        listener = target.listeners.get(event.event_type)
        if listener is None:
            continue
        listener(event)
        invoked += 1
        if event.propagation_stopped:
            break
    return invoked
