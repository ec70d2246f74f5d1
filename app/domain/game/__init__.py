from __future__ import annotations

from .handlers import (
    handle_start_game,
    handle_start_drawing,
    handle_drawing_data,
    handle_guess_word,
    handle_timer,
)

__all__ = [
    "handle_start_game",
    "handle_start_drawing",
    "handle_drawing_data",
    "handle_guess_word",
    "handle_timer",
]
