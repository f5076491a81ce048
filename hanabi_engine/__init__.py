"""Two-player Hanabi game engine."""

from hanabi_engine.cards import Card, Color, InvalidCardError
from hanabi_engine.card_set import CardSet
from hanabi_engine.deck import Deck
from hanabi_engine.state import GameState, create_initial_state
from hanabi_engine.moves import (
    Discard,
    DiscardResult,
    HintColor,
    HintResult,
    HintValue,
    Move,
    MoveResult,
    Play,
    PlayResult,
)
from hanabi_engine.executor import IllegalMoveError, execute_move
from hanabi_engine.move_generator import generate_legal_moves
from hanabi_engine.game import Game

__all__ = [
    "Card",
    "Color",
    "InvalidCardError",
    "CardSet",
    "Deck",
    "GameState",
    "create_initial_state",
    "Move",
    "Play",
    "Discard",
    "HintColor",
    "HintValue",
    "MoveResult",
    "PlayResult",
    "DiscardResult",
    "HintResult",
    "IllegalMoveError",
    "execute_move",
    "generate_legal_moves",
    "Game",
]
