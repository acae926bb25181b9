"""Windowed front end: draws the machine's display and feeds it keyboard input."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Sequence

import pygame

from chipeight.machine import SCREEN_HEIGHT, SCREEN_WIDTH, Chip8
from chipeight.tables import NO_KEY, key_to_hex

PIXEL_SIZE = 17.0
PIXEL_GAP = 1.0
PIXEL_PITCH = PIXEL_SIZE + PIXEL_GAP

WINDOW_SIZE = (1280, 720)
FRAMES_PER_SECOND = 60
DEFAULT_ROM = "roms/4-flags.ch8"

BACKGROUND_COLOR = (102, 102, 102)
PIXEL_ON_COLOR = (255, 255, 255)
PIXEL_OFF_COLOR = (0, 0, 0)


def pixel_position(x: int, y: int) -> tuple[float, float]:
    """Return the centre of display cell (x, y) in window-centred coordinates, y up."""
    return (
        x * PIXEL_PITCH - PIXEL_PITCH * (SCREEN_WIDTH / 2),
        -(y * PIXEL_PITCH) + PIXEL_PITCH * (SCREEN_HEIGHT / 2),
    )


def pressed_key_value(keys: Iterable[str]) -> int:
    """Return the keypad value of the first mapped key among those pressed, or NO_KEY."""
    for key in keys:
        value = key_to_hex(key)
        if value != NO_KEY:
            return value
    return NO_KEY


def _cell_rects() -> list[tuple[int, int, pygame.Rect]]:
    width, height = WINDOW_SIZE
    cells = []
    for y in range(SCREEN_HEIGHT):
        for x in range(SCREEN_WIDTH):
            centre_x, centre_y = pixel_position(x, y)
            left = width / 2 + centre_x - PIXEL_SIZE / 2
            top = height / 2 - centre_y - PIXEL_SIZE / 2
            rect = pygame.Rect(round(left), round(top), int(PIXEL_SIZE), int(PIXEL_SIZE))
            cells.append((x, y, rect))
    return cells


def run(chip8: Chip8) -> None:
    """Open a window and run the machine one instruction per frame until it is closed."""
    pygame.init()
    try:
        surface = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("CHIP-8")
        clock = pygame.time.Clock()
        cells = _cell_rects()
        pressed: dict[str, None] = {}

        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    pressed[pygame.key.name(event.key)] = None
                elif event.type == pygame.KEYUP:
                    pressed.pop(pygame.key.name(event.key), None)

            chip8.keyboard = pressed_key_value(pressed)
            chip8.tick()

            surface.fill(BACKGROUND_COLOR)
            for x, y, rect in cells:
                color = PIXEL_ON_COLOR if chip8.screen[y][x] else PIXEL_OFF_COLOR
                surface.fill(color, rect)
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load a ROM and run it in a window."""
    parser = argparse.ArgumentParser(prog="chipeight", description="Run a CHIP-8 program.")
    parser.add_argument("rom", nargs="?", default=DEFAULT_ROM, help="path of the ROM file")
    parser.add_argument(
        "--no-shift-quirk",
        action="store_true",
        help="shift Vx itself instead of copying Vy into Vx first",
    )
    args = parser.parse_args(argv)

    try:
        chip8 = Chip8.from_file(args.rom, shift_quirk_vx_eq_vy=not args.no_shift_quirk)
    except OSError as error:
        print(f"chipeight: cannot read {args.rom}: {error.strerror or error}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"chipeight: {error}", file=sys.stderr)
        return 1

    run(chip8)
    return 0