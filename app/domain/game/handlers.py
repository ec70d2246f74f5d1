# app/domain/game/handlers.py
from __future__ import annotations

from app.domain.game.handlers_start import handle_start_game
from app.domain.game.handlers_draw import handle_start_drawing, handle_drawing_data
from app.domain.game.handlers_guess import handle_guess_word
from app.domain.game.handlers_phase import handle_timer

__all__ = [
    "handle_start_game",
    "handle_start_drawing",
    "handle_drawing_data",
    "handle_guess_word",
    "handle_timer",
]
