"""Island-connecting puzzle game logic: boards, bridges, levels, achievements, editor and saves."""

__version__ = "0.1.0"