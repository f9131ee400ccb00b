"""Window event types, event masks and per-window hook tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

__all__ = [
    "EventType",
    "EventMask",
    "Event",
    "Hook",
    "HookTable",
    "MAX_EVENT",
]


class EventType(IntEnum):
    """Window system event codes."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35
    LAST_EVENT = 36


MAX_EVENT = int(EventType.LAST_EVENT)


class EventMask(IntFlag):
    """Bits selecting which events a window receives."""

    NONE = 0
    KEY_PRESS = 1 << 0
    KEY_RELEASE = 1 << 1
    BUTTON_PRESS = 1 << 2
    BUTTON_RELEASE = 1 << 3
    ENTER_WINDOW = 1 << 4
    LEAVE_WINDOW = 1 << 5
    POINTER_MOTION = 1 << 6
    POINTER_MOTION_HINT = 1 << 7
    BUTTON1_MOTION = 1 << 8
    BUTTON2_MOTION = 1 << 9
    BUTTON3_MOTION = 1 << 10
    BUTTON4_MOTION = 1 << 11
    BUTTON5_MOTION = 1 << 12
    BUTTON_MOTION = 1 << 13
    KEYMAP_STATE = 1 << 14
    EXPOSURE = 1 << 15
    VISIBILITY_CHANGE = 1 << 16
    STRUCTURE_NOTIFY = 1 << 17
    RESIZE_REDIRECT = 1 << 18
    SUBSTRUCTURE_NOTIFY = 1 << 19
    SUBSTRUCTURE_REDIRECT = 1 << 20
    FOCUS_CHANGE = 1 << 21
    PROPERTY_CHANGE = 1 << 22
    COLORMAP_CHANGE = 1 << 23
    OWNER_GRAB_BUTTON = 1 << 24


@dataclass(frozen=True)
class Event:
    """One event delivered to a window."""

    type: int
    window: Any = None
    keysym: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    message_type: Any = None
    data: tuple[Any, ...] = ()


@dataclass
class Hook:
    """A callback registered for one event type."""

    mask: int = 0
    func: Callable[..., Any] | None = None
    param: Any = None


def _key(hook: Hook, event: Event) -> Any:
    return hook.func(event.keysym, hook.param)


def _button(hook: Hook, event: Event) -> Any:
    return hook.func(event.button, event.x, event.y, hook.param)


def _motion(hook: Hook, event: Event) -> Any:
    return hook.func(event.x, event.y, hook.param)


def _expose(hook: Hook, event: Event) -> Any:
    if event.count:
        return None
    return hook.func(hook.param)


def _generic(hook: Hook, event: Event) -> Any:
    return hook.func(hook.param)


_HANDLERS: dict[int, Callable[[Hook, Event], Any]] = {
    EventType.KEY_PRESS: _key,
    EventType.KEY_RELEASE: _key,
    EventType.BUTTON_PRESS: _button,
    EventType.BUTTON_RELEASE: _button,
    EventType.MOTION_NOTIFY: _motion,
    EventType.EXPOSE: _expose,
}


class HookTable:
    """One hook slot per event type, as kept by each window."""

    def __init__(self) -> None:
        self._hooks = [Hook() for _ in range(MAX_EVENT)]

    @staticmethod
    def _index(event: int) -> int:
        index = int(event)
        if not 0 <= index < MAX_EVENT:
            raise ValueError(f"event type must be between 0 and {MAX_EVENT - 1}, got {index}")
        return index

    def __len__(self) -> int:
        return len(self._hooks)

    def __getitem__(self, event: int) -> Hook:
        return self._hooks[self._index(event)]

    def set_hook(
        self,
        event: int,
        mask: int,
        func: Callable[..., Any] | None,
        param: Any = None,
    ) -> None:
        """Register ``func`` for ``event``, replacing any earlier hook."""
        self._hooks[self._index(event)] = Hook(int(mask), func, param)

    def event_mask(self) -> int:
        """Return the union of the masks of all registered hooks."""
        mask = 0
        for hook in self._hooks:
            mask |= hook.mask
        return mask

    def dispatch(self, event: Event) -> Any:
        """Call the hook for ``event`` with its arguments; return its result.

        Events without a hook, of the two reserved codes below the first
        real event, or of an unknown type, are ignored.
        """
        kind = int(event.type)
        if not EventType.KEY_PRESS <= kind < MAX_EVENT:
            return None
        hook = self._hooks[kind]
        if hook.func is None:
            return None
        return _HANDLERS.get(kind, _generic)(hook, event)