"""The CHIP-8 virtual machine: memory, registers, timers, display and opcodes."""

from __future__ import annotations

import random
from os import PathLike
from pathlib import Path

from chipeight.tables import FONT, FONT_GLYPH_HEIGHT, NO_KEY

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
REGISTER_COUNT = 16
STACK_SIZE = 16
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
INSTRUCTION_SIZE = 2

_VF = 0xF


class InvalidOpcodeError(ValueError):
    """Raised when the machine meets an instruction it does not know."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"invalid opcode {opcode:#06x}")
        self.opcode = opcode


class Chip8:
    """A CHIP-8 interpreter holding its whole machine state."""

    def __init__(
        self,
        rom: bytes = b"",
        shift_quirk_vx_eq_vy: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self.ram = bytearray(MEMORY_SIZE)
        self.ram[: len(FONT)] = FONT
        self.registers = bytearray(REGISTER_COUNT)
        self.i = 0
        self.keyboard = NO_KEY
        self.delay_timer = 0
        self.sound_timer = 0
        self.program_counter = PROGRAM_START
        self.stack_pointer = 0
        self.stack = [0] * STACK_SIZE
        self.screen = [bytearray(SCREEN_WIDTH) for _ in range(SCREEN_HEIGHT)]
        self.shift_quirk_vx_eq_vy = shift_quirk_vx_eq_vy
        self._rng = rng if rng is not None else random.Random()
        self.load(rom)

    @classmethod
    def from_file(
        cls, path: str | PathLike[str], shift_quirk_vx_eq_vy: bool = True
    ) -> Chip8:
        """Create a machine with the program read from a ROM file."""
        return cls(Path(path).read_bytes(), shift_quirk_vx_eq_vy=shift_quirk_vx_eq_vy)

    def load(self, rom: bytes) -> None:
        """Copy a program into memory at the program start address."""
        end = PROGRAM_START + len(rom)
        if end > MEMORY_SIZE:
            raise ValueError(
                f"program of {len(rom)} bytes does not fit in memory "
                f"({MEMORY_SIZE - PROGRAM_START} bytes available)"
            )
        self.ram[PROGRAM_START:end] = rom

    def tick(self) -> None:
        """Count the timers down and execute the instruction at the program counter."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
        pc = self.program_counter
        opcode = self.ram[pc] << 8 | self.ram[pc + 1]
        self.perform_opcode(opcode)

    def perform_opcode(self, opcode: int) -> None:
        """Decode and execute a single 16-bit instruction."""
        nibbles = (
            (opcode >> 12) & 0xF,
            (opcode >> 8) & 0xF,
            (opcode >> 4) & 0xF,
            opcode & 0xF,
        )
        nnn = opcode & 0x0FFF
        kk = opcode & 0x00FF
        _, x, y, n = nibbles

        match nibbles:
            case (0x0, 0x0, 0xE, 0x0):
                self._clear_screen()
            case (0x0, 0x0, 0xE, 0xE):
                self._return()
            case (0x1, _, _, _):
                self.program_counter = nnn
            case (0x2, _, _, _):
                self._call(nnn)
            case (0x3, _, _, _):
                self._skip_if(self.registers[x] == kk)
            case (0x4, _, _, _):
                self._skip_if(self.registers[x] != kk)
            case (0x5, _, _, 0x0):
                self._skip_if(self.registers[x] == self.registers[y])
            case (0x6, _, _, _):
                self.registers[x] = kk
                self._advance()
            case (0x7, _, _, _):
                self.registers[x] = (self.registers[x] + kk) & 0xFF
                self._advance()
            case (0x8, _, _, 0x0):
                self.registers[x] = self.registers[y]
                self._advance()
            case (0x8, _, _, 0x1):
                self.registers[x] |= self.registers[y]
                self._advance()
            case (0x8, _, _, 0x2):
                self.registers[x] &= self.registers[y]
                self._advance()
            case (0x8, _, _, 0x3):
                self.registers[x] ^= self.registers[y]
                self._advance()
            case (0x8, _, _, 0x4):
                self._add_registers(x, y)
            case (0x8, _, _, 0x5):
                self._subtract(x, self.registers[x], self.registers[y])
            case (0x8, _, _, 0x6):
                self._shift_right(x, y)
            case (0x8, _, _, 0x7):
                self._subtract(x, self.registers[y], self.registers[x])
            case (0x8, _, _, 0xE):
                self._shift_left(x, y)
            case (0x9, _, _, 0x0):
                self._skip_if(self.registers[x] != self.registers[y])
            case (0xA, _, _, _):
                self.i = nnn
                self._advance()
            case (0xB, _, _, _):
                self.program_counter = nnn + self.registers[0]
            case (0xC, _, _, _):
                self.registers[x] = self._rng.randrange(256) & kk
                self._advance()
            case (0xD, _, _, _):
                self._draw(x, y, n)
            case (0xE, _, 0x9, 0xE):
                self._skip_if(self.registers[x] == self.keyboard)
            case (0xE, _, 0xA, 0x1):
                self._skip_if(self.registers[x] != self.keyboard)
            case (0xF, _, 0x0, 0x7):
                self.registers[x] = self.delay_timer
                self._advance()
            case (0xF, _, 0x0, 0xA):
                # Execution holds on this instruction until a key is down.
                if self.keyboard != NO_KEY:
                    self._advance()
            case (0xF, _, 0x1, 0x5):
                self.delay_timer = self.registers[x]
                self._advance()
            case (0xF, _, 0x1, 0x8):
                self.sound_timer = self.registers[x]
                self._advance()
            case (0xF, _, 0x1, 0xE):
                self.i += self.registers[x]
                self._advance()
            case (0xF, _, 0x2, 0x9):
                self.i = self.registers[x] * FONT_GLYPH_HEIGHT
                self._advance()
            case (0xF, _, 0x3, 0x3):
                self._store_bcd(x)
            case (0xF, _, 0x5, 0x5):
                self._store_registers(x)
            case (0xF, _, 0x6, 0x5):
                self._read_registers(x)
            case _:
                raise InvalidOpcodeError(opcode)

    def _advance(self, instructions: int = 1) -> None:
        self.program_counter += instructions * INSTRUCTION_SIZE

    def _skip_if(self, condition: bool) -> None:
        self._advance(2 if condition else 1)

    def _clear_screen(self) -> None:
        for row in self.screen:
            row[:] = bytes(SCREEN_WIDTH)
        self._advance()

    def _return(self) -> None:
        if self.stack_pointer == 0:
            raise IndexError("return with an empty call stack")
        self.program_counter = self.stack[self.stack_pointer]
        self.stack_pointer -= 1
        self._advance()

    def _call(self, address: int) -> None:
        if self.stack_pointer + 1 >= STACK_SIZE:
            raise IndexError("call stack overflow")
        self.stack_pointer += 1
        self.stack[self.stack_pointer] = self.program_counter
        self.program_counter = address

    def _add_registers(self, x: int, y: int) -> None:
        total = self.registers[x] + self.registers[y]
        self.registers[_VF] = 1 if total > 0xFF else 0
        if x != _VF:
            self.registers[x] = total & 0xFF
        self._advance()

    def _subtract(self, x: int, minuend: int, subtrahend: int) -> None:
        self.registers[_VF] = 1 if minuend >= subtrahend else 0
        if x != _VF:
            self.registers[x] = (minuend - subtrahend) & 0xFF
        self._advance()

    def _shift_right(self, x: int, y: int) -> None:
        original_vx = self.registers[x]
        if self.shift_quirk_vx_eq_vy:
            self.registers[x] = self.registers[y]
        self.registers[_VF] = original_vx & 0x1
        if x != _VF:
            self.registers[x] >>= 1
        self._advance()

    def _shift_left(self, x: int, y: int) -> None:
        original_vx = self.registers[x]
        if self.shift_quirk_vx_eq_vy:
            self.registers[x] = self.registers[y]
        self.registers[_VF] = 1 if original_vx & 0x80 else 0
        if x != _VF:
            self.registers[x] = (self.registers[x] << 1) & 0xFF
        self._advance()

    def _draw(self, x: int, y: int, height: int) -> None:
        self.registers[_VF] = 0
        origin_x = self.registers[x]
        origin_y = self.registers[y]
        for offset in range(height):
            row = self.screen[(origin_y + offset) % SCREEN_HEIGHT]
            sprite_byte = self.ram[self.i + offset]
            for bit in range(8):
                column = (origin_x + bit) % SCREEN_WIDTH
                color = (sprite_byte >> (7 - bit)) & 1
                self.registers[_VF] |= color & row[column]
                row[column] ^= color
        self._advance()

    def _store_bcd(self, x: int) -> None:
        value = self.registers[x]
        self.ram[self.i] = value // 100
        self.ram[self.i + 1] = value % 100 // 10
        self.ram[self.i + 2] = value % 10
        self._advance()

    def _store_registers(self, x: int) -> None:
        for index, value in enumerate(self.registers[: x + 1]):
            self.ram[self.i + index] = value
        self._advance()

    def _read_registers(self, x: int) -> None:
        for index in range(x + 1):
            self.registers[index] = self.ram[self.i + index]
        self._advance()