# chipeight

A CHIP-8 virtual machine. The interpreter core has 4 KiB of memory, sixteen
8-bit registers, a 16-entry call stack, delay and sound timers and a 64×32
monochrome screen. A small pygame front end shows the screen and feeds it
keyboard input.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Running a program

```
chipeight path/to/program.ch8
```

If no ROM path is given, `roms/4-flags.ch8` is read, relative to the current
directory. A 1280×720 window opens showing the display. The window runs at
60 frames per second. Each frame the front end reads the keyboard and runs one
instruction. It then redraws the screen. Close the window to stop.

Options:

- `--no-shift-quirk`: make the 8xy6 and 8xyE shifts work on Vx itself
  instead of copying Vy into Vx first.

If the ROM cannot be read, or is too large to fit in memory, the command
prints a message to standard error and exits with status 1.

### Keys

The sixteen CHIP-8 keys sit on the left of a QWERTY keyboard:

```
1 2 3 4        1 2 3 C
Q W E R   ->   4 5 6 D
A S D F        7 8 9 E
Z X C V        A 0 B F
```

Only one key is seen at a time. When several mapped keys are held, the one
pressed first counts. When no mapped key is held, the keyboard reads as
`0xFF`.

## Using the interpreter from Python

```python
from chipeight.machine import Chip8

chip8 = Chip8.from_file("program.ch8")
for _ in range(100):
    chip8.tick()
```

- `Chip8(rom=b"", shift_quirk_vx_eq_vy=True, rng=None)` builds a machine.
  It loads the hex font at address 0 and the program bytes at `0x200`. Pass a
  `random.Random` as `rng` to make the Cxkk instruction reproducible.
- `Chip8.from_file(path, shift_quirk_vx_eq_vy=True)` reads the program from a
  file.
- `load(rom)` copies a program to `0x200`. It raises `ValueError` if the
  program does not fit in memory.
- `tick()` counts both timers down by one and runs the instruction at the
  program counter.
- `perform_opcode(opcode)` runs a single 16-bit instruction. An opcode the
  interpreter does not know raises `InvalidOpcodeError`, a `ValueError` with
  the opcode in its `opcode` attribute. A return with an empty call stack
  raises `IndexError`, and so does a call when the stack is full.

The machine state is held in plain attributes: `ram`, `registers`, `i`,
`program_counter`, `stack`, `stack_pointer`, `delay_timer`, `sound_timer`,
`keyboard` and `screen`. `screen` is a list of 32 rows, each row a
`bytearray` of 64 cells that are 0 or 1. Set `keyboard` to the key value
that is held, or to `0xFF` when no key is held.

Other helpers:

- `chipeight.app.run(chip8)` opens the window for a machine you built
  yourself.
- `chipeight.app.pressed_key_value(keys)` returns the key value of the first
  mapped key name among `keys`, or `0xFF`.
- `chipeight.app.pixel_position(x, y)` gives the centre of a screen cell in
  window-centred coordinates, with y pointing up.
- `chipeight.tables.key_to_hex(key)` turns a key name such as `"q"` or `"4"`
  into a CHIP-8 key value. Case does not matter. An unmapped name gives
  `0xFF`. `chipeight.tables.KEYPAD` holds the full mapping and
  `chipeight.tables.FONT` holds the 80-byte hex font.

## What it does not do

- There is no sound. The sound timer counts down, but no tone is played.
- The timers count down once per executed instruction, not on a separate
  60 Hz clock.
- Fx0A holds execution until a key is held, but it does not store that key in
  Vx.