"""An in-memory display connection: windows, pointer, fonts and an event loop."""

from __future__ import annotations

import os
import socket
from collections import deque
from collections.abc import Callable
from typing import Any

from .colors import PixelFormat, color_value
from .events import MAX_EVENT, Event, EventMask, EventType, HookTable
from .image import Image, ImageType

__all__ = [
    "DisplayError",
    "Display",
    "Window",
    "ALL_EVENTS",
    "WM_PROTOCOLS",
    "WM_DELETE_WINDOW",
]

ALL_EVENTS = 0xFFFFFF
WM_PROTOCOLS = "WM_PROTOCOLS"
WM_DELETE_WINDOW = "WM_DELETE_WINDOW"

_LOCALHOST = "localhost"
_HOSTNAME_LIMIT = 32
_NO_TRUECOLOR = "No TrueColor Visual available"

_DEFAULT_MASKS: dict[int, tuple[int, int, int]] = {
    8: (0xE0, 0x1C, 0x03),
    15: (0x7C00, 0x03E0, 0x001F),
    16: (0xF800, 0x07E0, 0x001F),
    24: (0xFF0000, 0x00FF00, 0x0000FF),
    32: (0xFF0000, 0x00FF00, 0x0000FF),
}

_STRUCTURE = EventMask.STRUCTURE_NOTIFY | EventMask.SUBSTRUCTURE_NOTIFY
_MOTION = (
    EventMask.POINTER_MOTION
    | EventMask.BUTTON_MOTION
    | EventMask.BUTTON1_MOTION
    | EventMask.BUTTON2_MOTION
    | EventMask.BUTTON3_MOTION
    | EventMask.BUTTON4_MOTION
    | EventMask.BUTTON5_MOTION
)

# Mask bits a window must select to receive each event type. Types not
# listed here are always delivered.
_SELECTED_BY: dict[int, int] = {
    EventType.KEY_PRESS: EventMask.KEY_PRESS,
    EventType.KEY_RELEASE: EventMask.KEY_RELEASE,
    EventType.BUTTON_PRESS: EventMask.BUTTON_PRESS,
    EventType.BUTTON_RELEASE: EventMask.BUTTON_RELEASE,
    EventType.MOTION_NOTIFY: _MOTION,
    EventType.ENTER_NOTIFY: EventMask.ENTER_WINDOW,
    EventType.LEAVE_NOTIFY: EventMask.LEAVE_WINDOW,
    EventType.FOCUS_IN: EventMask.FOCUS_CHANGE,
    EventType.FOCUS_OUT: EventMask.FOCUS_CHANGE,
    EventType.KEYMAP_NOTIFY: EventMask.KEYMAP_STATE,
    EventType.EXPOSE: EventMask.EXPOSURE,
    EventType.VISIBILITY_NOTIFY: EventMask.VISIBILITY_CHANGE,
    EventType.DESTROY_NOTIFY: _STRUCTURE,
    EventType.UNMAP_NOTIFY: _STRUCTURE,
    EventType.MAP_NOTIFY: _STRUCTURE,
    EventType.REPARENT_NOTIFY: _STRUCTURE,
    EventType.CONFIGURE_NOTIFY: _STRUCTURE,
    EventType.GRAVITY_NOTIFY: _STRUCTURE,
    EventType.CIRCULATE_NOTIFY: _STRUCTURE,
    EventType.RESIZE_REQUEST: EventMask.RESIZE_REDIRECT,
    EventType.PROPERTY_NOTIFY: EventMask.PROPERTY_CHANGE,
    EventType.COLORMAP_NOTIFY: EventMask.COLORMAP_CHANGE,
}


class DisplayError(RuntimeError):
    """Raised when the display or one of its windows cannot do what is asked."""


def _shared_memory_usable(display_name: str | None, hostname: str) -> bool:
    """Shared memory only works when the server runs on this host."""
    if not display_name or display_name.startswith(":"):
        return True
    host = hostname[:_HOSTNAME_LIMIT]
    return display_name.startswith(host) or display_name.startswith(_LOCALHOST)


class Display:
    """A connection to a display holding windows and a queue of events."""

    def __init__(
        self,
        depth: int = 24,
        screen_size: tuple[int, int] = (1920, 1080),
        masks: tuple[int, int, int] | None = None,
        true_color: bool = True,
        display_name: str | None = None,
        hostname: str | None = None,
    ) -> None:
        if depth not in _DEFAULT_MASKS:
            raise DisplayError(f"unsupported depth {depth}")
        if not true_color:
            raise DisplayError(_NO_TRUECOLOR)
        screen_width, screen_height = screen_size
        if screen_width <= 0 or screen_height <= 0:
            raise DisplayError(f"invalid screen size {screen_width}x{screen_height}")
        try:
            self.pixel_format = PixelFormat.from_masks(*(masks or _DEFAULT_MASKS[depth]))
        except ValueError as exc:
            raise DisplayError(str(exc)) from exc
        if display_name is None:
            display_name = os.environ.get("DISPLAY")
        if hostname is None:
            hostname = socket.gethostname()
        self.depth = depth
        self.use_xshm = _shared_memory_usable(display_name, hostname)
        self.private_cmap = False
        self.wm_protocols = WM_PROTOCOLS
        self.wm_delete_window = WM_DELETE_WINDOW
        self.font: str | None = None
        self._screen = (screen_width, screen_height)
        self._windows: list[Window] = []
        self._queue: deque[Event] = deque()
        self._loop_hook: Callable[..., Any] | None = None
        self._loop_param: Any = None
        self._end_loop = False
        self._closed = False
        self._pointer = (0, 0)

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._closed:
            self.destroy()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def windows(self) -> tuple[Window, ...]:
        """Open windows, most recently created first."""
        return tuple(self._windows)

    @property
    def pending(self) -> int:
        """Number of events waiting in the queue."""
        return len(self._queue)

    def _check_open(self) -> None:
        if self._closed:
            raise DisplayError("display has been closed")

    def _pixel(self, color: int) -> int:
        return self.color_value(color) & ((1 << self.depth) - 1)

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a fixed-size window; its first Expose event is queued."""
        self._check_open()
        if width <= 0 or height <= 0:
            raise DisplayError(f"window size must be positive, got {width}x{height}")
        window = Window(self, width, height, title)
        self._windows.insert(0, window)
        self._queue.append(Event(EventType.EXPOSE, window=window, count=0))
        return window

    def new_image(self, width: int, height: int) -> Image:
        """Create a zero-filled image in this display's pixel layout."""
        self._check_open()
        try:
            image = Image(width, height, self.depth)
        except ValueError as exc:
            raise DisplayError(str(exc)) from exc
        image.type = ImageType.SHM if self.use_xshm else ImageType.XIMAGE
        return image

    def color_value(self, color: int) -> int:
        """Return the pixel value of a 0xRRGGBB colour on this display."""
        self._check_open()
        return color_value(color, self.depth, self.pixel_format)

    def loop_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(param)`` each time the loop has drained its queue."""
        self._loop_hook = func
        self._loop_param = param

    def post_event(self, event: Event) -> bool:
        """Queue ``event`` if its window is open and selects it."""
        self._check_open()
        window = event.window
        if not isinstance(window, Window) or window not in self._windows:
            return False
        needed = _SELECTED_BY.get(int(event.type))
        if needed is not None and not window.event_mask & needed:
            return False
        self._queue.append(event)
        return True

    def flush_events(self) -> None:
        """Discard every pending event."""
        self._check_open()
        self._queue.clear()

    def _deliver(self, event: Event) -> None:
        window = next((w for w in self._windows if w is event.window), None)
        if window is None:
            return
        kind = int(event.type)
        if (
            kind == EventType.CLIENT_MESSAGE
            and event.message_type == self.wm_protocols
            and event.data
            and event.data[0] == self.wm_delete_window
        ):
            hook = window.hooks[EventType.DESTROY_NOTIFY]
            if hook.func is not None:
                hook.func(hook.param)
            if window.destroyed:
                return
        if 0 <= kind < MAX_EVENT:
            window.hooks.dispatch(event)

    def loop(self) -> None:
        """Deliver events to window hooks until the loop cannot go on.

        Returns when no window is left, when loop_end was called, or when
        the queue is empty and no loop hook could produce more events.
        """
        self._check_open()
        for window in self._windows:
            window.event_mask = window.hooks.event_mask()
        while self._windows and not self._end_loop:
            while not self._end_loop and (self._loop_hook is None or self._queue):
                if not self._queue:
                    return
                self._deliver(self._queue.popleft())
            if self._loop_hook is not None:
                self._loop_hook(self._loop_param)

    def loop_end(self) -> None:
        """Make the running loop, and any later one, return."""
        self._end_loop = True

    def screen_size(self) -> tuple[int, int]:
        """Return the width and height of the screen."""
        self._check_open()
        return self._screen

    def destroy(self) -> None:
        """Close the connection; every window goes with it."""
        self._check_open()
        for window in self._windows:
            window.destroyed = True
        self._windows.clear()
        self._queue.clear()
        self._closed = True


class Window:
    """A fixed-size window on a display, with its own pixels and hooks."""

    def __init__(self, display: Display, width: int, height: int, title: str) -> None:
        self._display = display
        self._width = width
        self._height = height
        self.title = title
        self.event_mask = ALL_EVENTS
        self.hooks = HookTable()
        self.texts: list[tuple[int, int, int, str, str | None]] = []
        self.font: str | None = None
        self.cursor_visible = True
        self.destroyed = False
        self._pixels = [[0] * width for _ in range(height)]

    @property
    def display(self) -> Display:
        return self._display

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_alive(self) -> None:
        self._display._check_open()
        if self.destroyed:
            raise DisplayError("window has been destroyed")

    def clear(self) -> None:
        """Paint the whole window with the background pixel 0."""
        self._check_alive()
        for row in self._pixels:
            row[:] = [0] * self._width
        self.texts.clear()

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Draw one pixel; points outside the window are clipped."""
        self._check_alive()
        value = self._display._pixel(color)
        if 0 <= x < self._width and 0 <= y < self._height:
            self._pixels[y][x] = value

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value shown at (x, y)."""
        self._check_alive()
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} window")
        return self._pixels[y][x]

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` with its top-left corner at (x, y), clipped."""
        self._check_alive()
        if image.destroyed:
            raise DisplayError("image has been destroyed")
        if image.depth != self._display.depth:
            raise DisplayError(
                f"image depth {image.depth} does not match display depth {self._display.depth}"
            )
        mask = (1 << self._display.depth) - 1
        x0, x1 = max(0, -x), min(image.width, self._width - x)
        y0, y1 = max(0, -y), min(image.height, self._height - y)
        if x0 >= x1:
            return
        for iy in range(y0, y1):
            row = self._pixels[y + iy]
            row[x + x0:x + x1] = [image.get_pixel(ix, iy) & mask for ix in range(x0, x1)]

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        self._check_alive()
        self.texts.append((x, y, self._display._pixel(color), text, self.font))

    def set_font(self, name: str) -> None:
        """Load ``name`` as the font for later strings, replacing the previous one."""
        self._check_alive()
        if not name:
            raise ValueError("font name must not be empty")
        self._display.font = name
        self.font = name

    def hook(self, event: int, mask: int, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Register ``func`` for any event type with the mask that selects it."""
        self.hooks.set_hook(event, mask, func, param)

    def key_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(keysym, param)`` when a key is released."""
        self.hooks.set_hook(EventType.KEY_RELEASE, EventMask.KEY_RELEASE, func, param)

    def mouse_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(button, x, y, param)`` when a mouse button is pressed."""
        self.hooks.set_hook(EventType.BUTTON_PRESS, EventMask.BUTTON_PRESS, func, param)

    def expose_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(param)`` when the window needs redrawing."""
        self.hooks.set_hook(EventType.EXPOSE, EventMask.EXPOSURE, func, param)

    def mouse_move(self, x: int, y: int) -> None:
        """Move the pointer to (x, y) relative to this window."""
        self._check_alive()
        self._display._pointer = (x, y)

    def mouse_get_pos(self) -> tuple[int, int]:
        """Return the pointer position relative to this window."""
        self._check_alive()
        return self._display._pointer

    def mouse_hide(self) -> None:
        """Show a blank cursor over this window."""
        self._check_alive()
        self.cursor_visible = False

    def mouse_show(self) -> None:
        """Restore the normal cursor over this window."""
        self._check_alive()
        self.cursor_visible = True

    def destroy(self) -> None:
        """Clear and close the window; its pending events are dropped."""
        self._check_alive()
        self.clear()
        self._display._windows.remove(self)
        self.destroyed = True