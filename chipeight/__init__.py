"""A CHIP-8 virtual machine with a pygame display."""

__version__ = "0.1.0"