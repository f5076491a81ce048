"""Interactive strategy that reads moves from a person at the terminal."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from hanabi_engine.cards import Color, check_value
from hanabi_engine.display import format_knowledge
from hanabi_engine.moves import Discard, HintColor, HintValue, Play
from strategies.base import Strategy
from strategies.knowledge import KnowledgeTracker

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult

HELP_TEXT = (
    "Commands: 'play N', 'discard N', 'hint color <red|green|blue|yellow|white>', "
    "'hint value <1-5>', 'q' to quit"
)


class HumanQuit(Exception):
    """Raised when the player asks to leave the game."""

    pass


def parse_command(text: str) -> Move:
    """Parse a typed command into a move.

    Raises:
        ValueError: If the command is malformed (InvalidCardError included).
    """
    parts = text.strip().lower().split()
    match parts:
        case ["play", index]:
            return Play(int(index))
        case ["discard", index]:
            return Discard(int(index))
        case ["hint", "color", color]:
            return HintColor(Color.parse(color))
        case ["hint", "value", value]:
            return HintValue(check_value(int(value)))
        case _:
            raise ValueError(f"Unrecognized command: {text.strip()!r}")


class HumanStrategy(Strategy):
    """Prompts for a move until a legal one is entered.

    Args:
        input_fn: Reads one line given a prompt. Defaults to ``input``.
        output_fn: Shows one message. Defaults to ``print``.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn
        self.knowledge = KnowledgeTracker()

    @property
    def name(self) -> str:
        return "Human"

    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        self.knowledge.initialize(partner_hand)

    def decide_move(self) -> Move:
        legal_moves = self.knowledge.legal_moves()
        self._output("What you know about your hand:")
        self._output(format_knowledge(self.knowledge.my_knowledge))

        while True:
            text = self._input("Your move: ")
            if text.strip().lower() in ("q", "quit"):
                raise HumanQuit()
            try:
                move = parse_command(text)
            except ValueError as e:
                self._output(f"{e}\n{HELP_TEXT}")
                continue
            if move not in legal_moves:
                self._output(f"{move} is not legal right now")
                continue
            return move

    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        self.knowledge.apply_own_move(move, result, drew_replacement)

    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        self.knowledge.apply_partner_move(move, result)
        self._output(f"Partner: {move} -> {result}")


__all__ = ["HumanQuit", "HumanStrategy", "parse_command"]
