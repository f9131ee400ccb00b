# solong

A small engine for a tile-map puzzle game. It reads a map file and checks
that the map is walled in. It also checks that every open tile can be
reached from the player's start. It then draws the map, one 32x32 tile per
cell, into a window on an in-memory display.

## Map files

A map is a grid of characters with one row per line:

| Char | Meaning     | Tile colour |
|------|-------------|-------------|
| `1`  | wall        | `0x000000`  |
| `0`  | floor       | `0xFFFFFF`  |
| `P`  | player      | `0x551606`  |
| `C`  | collectible | `0xFFA500`  |
| `E`  | exit        | `0x013220`  |

Here is a small map:

```
11111
1P0C1
100E1
11111
```

The reader applies these rules:

- It strips a trailing newline from each line.
- Every row must have the same length. If not, it raises
  `solong.mapdata.MapError("Uneven columns number")`.
- A map may have at most 1025 rows (`MAX_ROWS`).

A map is valid only when both of these hold:

- The first row, the last row, the first column and the last column are all `1`.
- A flood fill that starts from `P` reaches every cell that is not a wall.

## Command line

```
solong path/to/map.ber
```

The command prints progress lines to standard output as it works, for
example `[ ] Parsing file` and `[x] File parsed`. It then opens a window
sized to the map and draws the map. The event loop runs until no events
are left.

On failure it writes two lines to standard error, then exits with status 1:

- a message such as `[!] Invalid map` or `[!] Error opening file`
- `[i] Everything has been properly freed, exiting cleanly`

Exit statuses:

| Case                               | Status |
|------------------------------------|--------|
| the map was drawn                  | 1      |
| any failure                        | 1      |
| not exactly one argument was given | 0      |

`solong.cli.main(argv=None)` returns this status instead of exiting. When
`argv` is not given, it reads its arguments from `sys.argv`.

## Library use

```python
from solong.mapdata import parse_file, valid_map
from solong.display import Display
from solong.render import window_init, render_map

mdata = parse_file("level.ber")          # raises MapError on bad input
if valid_map(mdata):
    with Display() as display:
        window = window_init(mdata, display, "Level 1")
        render_map(window, mdata)
        print(hex(window.pixel(0, 0)))   # 0x0, a wall tile
```

Events are queued on the display and delivered to window hooks by
`Display.loop()`:

```python
from solong.display import Display
from solong.events import Event, EventType

with Display() as display:
    win = display.new_window(200, 100, "demo")
    win.key_hook(lambda keysym, param: print("key", hex(keysym)), None)
    display.post_event(Event(EventType.KEY_RELEASE, window=win, keysym=0xFF1B))
    display.loop()
```

## Modules

- `solong.mapdata` reads and checks maps.
  - `MapData` holds `map`, `col_nb`, `row_nb` and the working copy `d_map`.
    `MapData.duplicate()` fills `d_map` from the map.
  - `parse_lines` and `parse_file` build a `MapData`.
  - `valid_borders`, `valid_path` and `valid_map` check it.
  - `MapError` is raised on bad input.
- `solong.render` draws maps.
  - `window_init` opens a window one tile per cell.
  - `render_map` draws the tiles, and `TILE_COLORS` gives their colours.
  - `TILE_SIZE` is 32.
  - `create_trgb` packs transparency and RGB into one signed 32-bit value.
- `solong.display` is the in-memory display.
  - `Display` takes the keyword options `depth`, `screen_size`, `masks`,
    `true_color`, `display_name` and `hostname`.
  - It owns `Window` objects, which hold pixels you can read back with
    `Window.pixel`.
  - It also provides images, a queue of events, `loop`, `loop_hook` and
    `loop_end`.
  - `Window` has `pixel_put`, `put_image`, `string_put`, `set_font` and `clear`.
  - `Window` has hooks: `hook`, `key_hook`, `mouse_hook` and `expose_hook`.
  - `Window` has pointer methods: `mouse_move`, `mouse_get_pos`, `mouse_hide`
    and `mouse_show`.
  - Errors are raised as `DisplayError`.
- `solong.events` holds event types and dispatch.
  - `EventType` and `EventMask` list the event types and their masks.
  - `Event` describes one event.
  - `Hook` and `HookTable` hold the callbacks for one window.
    `HookTable.dispatch` calls the right callback with the event's arguments.
- `solong.image` holds off-screen images.
  - `new_image` and `Image` create a zero-filled pixel buffer.
  - The buffer has `put_pixel`, `get_pixel`, `data_addr` and `destroy`.
  - `ImageType` tells how an image's pixels are kept.
- `solong.xpm` loads XPM images.
  - `xpm_to_image` reads XPM data from a list of strings.
  - `xpm_file_to_image` reads XPM data from a file.
  - `parse_xpm` does the parsing for both; it raises `XpmError` on bad data.
  - Helpers: `strip_comments`, `split_words`, `str_str` and `str_str_quoted`.
- `solong.colors` handles colours.
  - `lookup_color` and `text_to_rgb` resolve X11 colour names, ignoring case.
  - `PixelFormat.from_masks` and `color_value` convert `0xRRGGBB` colours
    for lower display depths.
- `solong.printf` is a small formatter.
  - `format_printf` and `ft_printf` support `%c %s %p %d %i %u %x %X %%`.
  - `itoa_base` and `uitoa_base` write integers in any base from 2 to 36.

## What it does not do

The display exists only in memory:

- Nothing is shown on a real screen.
- No keyboard or mouse input arrives from the system. Events reach windows
  only through `Display.post_event`.
- `string_put` records text with its position and font; it does not rasterise
  glyphs.

The command draws the map and returns. It has no game play: the player
cannot move, and nothing counts collectibles or moves.

## Tests

```
pip install -e .[test]
pytest
```