# wolfmac

The core of a classic 8-bit ray-cast shooter engine, written as plain Python
objects. It has no dependencies beyond the standard library.

## Modules

- `wolfmac.codec`
  - `decompress_lzss(data, length)` unpacks LZSS-compressed resources. It
    raises `ValueError` on truncated input or on a back reference that points
    before the start of the output.
  - `swap_ushort(value)` swaps the bytes of a 16-bit value.
  - `format_unsigned(value)` turns a 32-bit unsigned value into decimal text.
- `wolfmac.keys`
  - `translate_key(message, modifiers)` decodes a raw key event into a
    frozen `KeyPress` with `key`, `scan_code`, `modifiers` and
    `quit_requested`.
  - The four arrow-key codes are remapped.
  - Command-Q sets `quit_requested`.
- `wolfmac.audio`
  - `AudioState` drives any object that implements the `SoundBackend`
    protocol, switched by the `AudioFlag` values `SFX` and `MUSIC`.
  - `play_sound`, `stop_sound` and `sound_off` control sound effects.
  - `play_song` loops a song, or stops the music for song 0. It remembers the
    last requested song in `killed_song`.
- `wolfmac.video`
  - `Screen` is an 8-bit indexed frame buffer with a row stride.
  - It can `clear` to a colour and draw shapes with `draw_shape`,
    `draw_masked_shape` and `draw_offset_masked_shape`.
  - It can remove a shape with `erase_masked_shape` and hit-test one with
    `test_masked_shape` and `test_masked_background`.
  - `Color` names palette entries.
  - `Font.from_bytes` parses a 4-bit proportional font. `TextRenderer` draws
    with it through `draw_char` and `draw_string`, with `set_position`,
    `set_color`, `use_mask` and `use_zero` as settings.
- `wolfmac.palette`
  - `PaletteManager` holds the current 768-byte palette. `apply` makes a
    palette current and returns its colour table. It also passes the table to
    an optional sink.
  - `fade_steps` applies and yields the 16 steps of a fade. It yields nothing
    when the target is already current.
  - `black_palette` and `build_color_table` are helpers for these.
- `wolfmac.tiles`
  - `TileMap` is a 64×64 grid of 16-bit tiles, addressed as `tilemap[x, y]`.
    It has `set_flags`, `clear_flags` and `number`.
  - `TileFlag` names the tile bits.
- `wolfmac.doors`
  - `DoorSystem` runs a list of `Door`s against a tile map.
  - `operate_door` handles locked doors and toggling. `move_doors` animates
    the doors. `connect_areas` recomputes which areas the player's area
    reaches.
  - `AreaLinks` keeps the area connections that open doors create.
  - `DoorAction` names the door states.
- `wolfmac.movement`
  - `Mover` steps `Actor`s across the tile map.
  - It provides `try_walk`, `select_chase_dir`, `select_dodge_dir`,
    `move_actor`, `check_side` and `check_diag`.
  - Actors open doors as they go.
  - `Direction`, `opposite` and `diagonal` describe the eight compass
    directions.

## Installing

```
pip install .
```

## Examples

```python
from wolfmac.codec import decompress_lzss, format_unsigned

# A flag byte of 0xFF means the next eight bytes are stored as literals.
packed = bytes([0xFF]) + b"ABCDEFGH"
assert decompress_lzss(packed, 8) == b"ABCDEFGH"
assert format_unsigned(1200) == "1200"
```

```python
from wolfmac.doors import Door, DoorAction, DoorSystem
from wolfmac.tiles import TileMap

system = DoorSystem(TileMap(), [Door(tile_x=5, tile_y=5, area1=1, area2=2)])
system.player_area = 1
system.operate_door(0, keys=0)   # starts the unlocked door opening
system.move_doors(50)            # enough tics to open it fully
assert system.doors[0].action is DoorAction.OPEN
assert system.area_by_player == {1, 2}
```

## What it does not do

The package covers game-state and drawing logic only:

- It opens no window and produces no sound. The frame buffer and the colour
  tables are handed to your own code, and audio goes through the
  `SoundBackend` you supply.
- It does not load levels or resources.
- It has no renderer, game loop or command-line program.

## Running the tests

```
pip install .[test]
pytest
```