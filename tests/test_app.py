import pytest

from chipeight.app import (
    PIXEL_GAP,
    PIXEL_SIZE,
    main,
    pixel_position,
    pressed_key_value,
    run,
)
from chipeight.machine import Chip8, InvalidOpcodeError
from chipeight.tables import NO_KEY


def test_pixel_position_centre_of_grid_is_origin():
    assert pixel_position(32, 16) == (0.0, 0.0)


def test_pixel_position_horizontal_spacing():
    first_x, first_y = pixel_position(0, 0)
    second_x, second_y = pixel_position(1, 0)
    assert second_x - first_x == PIXEL_SIZE + PIXEL_GAP
    assert second_y == first_y


def test_pixel_position_rows_go_downwards():
    _, top = pixel_position(5, 0)
    _, below = pixel_position(5, 1)
    assert top - below == PIXEL_SIZE + PIXEL_GAP


def test_pixel_positions_are_distinct():
    positions = {pixel_position(x, y) for y in range(32) for x in range(64)}
    assert len(positions) == 64 * 32


def test_pressed_key_value_none_pressed():
    assert pressed_key_value([]) == NO_KEY


def test_pressed_key_value_ignores_unmapped_keys():
    assert pressed_key_value(["left shift", "space"]) == NO_KEY


@pytest.mark.parametrize(
    "keys, expected",
    [
        (["x"], 0x0),
        (["4"], 0xC),
        (["left shift", "w"], 0x5),
        (["q", "e"], 0x4),
        (["V"], 0xF),
    ],
)
def test_pressed_key_value_first_mapped_key(keys, expected):
    assert pressed_key_value(keys) == expected


def test_pressed_key_value_accepts_generator():
    assert pressed_key_value(key for key in ["tab", "z"]) == 0xA


def test_main_missing_rom_reports_error(tmp_path, capsys):
    missing = tmp_path / "missing.ch8"
    assert main([str(missing)]) == 1
    assert str(missing) in capsys.readouterr().err


def test_main_oversized_rom_reports_error(tmp_path, capsys):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(4096))
    assert main([str(rom)]) == 1
    assert "does not fit" in capsys.readouterr().err


def test_run_executes_until_invalid_opcode(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    chip8 = Chip8(bytes([0x61, 0x05, 0x00, 0x00]))
    with pytest.raises(InvalidOpcodeError):
        run(chip8)
    assert chip8.registers[1] == 0x05
    assert chip8.program_counter == 0x202
    assert chip8.keyboard == NO_KEY