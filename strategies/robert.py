"""Robert: a scoring agent that rates every legal move and plays the best one.

Each move class has its own score built from tunable weights:

- Play: how likely the card is playable (raised to an exponent so that
  near-certainty dominates), minus the risk of a mistake and of losing the
  last copy of a card, plus bonuses when a known card unlocks partner cards.
- Discard: how likely the card is useless, plus how badly tokens are needed,
  minus the same risk terms.
- Hint: how much the partner learns about each slot, plus bonuses when the
  hint singles out a playable card or makes a partner card certainly
  playable or discardable.

A hint that touches exactly one of our slots is remembered as the focused
hint and pulls the Play score of that slot up.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values

from hanabi_engine.cards import MAX_VALUE
from hanabi_engine.moves import Discard, Hint, HintResult, Play
from hanabi_engine.state import MAX_HINTS
from strategies.base import Strategy
from strategies.knowledge import KnowledgeTracker

if TYPE_CHECKING:
    from collections.abc import Mapping

    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult

logger = logging.getLogger(__name__)

# Probabilities above this count as certain
CERTAIN = 1.0 - 1e-14
# Partner beliefs above/below this count as known/unknown
PARTNER_KNOWS = 0.99
# Added to the mistake count when weighing the risk of a failed play
MISTAKE_OFFSET = 5


@dataclass(frozen=True, slots=True)
class RobertParams:
    """Tuning weights for RobertStrategy."""

    score_play_base: float = 1.0
    score_discard_base: float = 1.0
    score_hint_base: float = 1.0

    # Playing
    score_play_exponent_probability: int = 3
    score_play_by_playability_weight: float = 20.0
    score_play_badness_mistake_weight: float = 100.0
    score_play_can_play_5_sure: float = 1000.0
    score_play_make_playable: float = 50.0
    score_play_make_playable_weighted_by_partner_knowledge: float = 40.0
    score_play_make_discardable: float = 2.0
    score_play_make_discardable_weighted_by_partner_knowledge: float = 2.0
    score_play_sure: float = 100.0
    score_play_focused_hint: float = 100.0

    # Discarding
    score_discard_exponent_probability: int = 2
    score_discard_value_of_a_hint: float = 10.0
    score_discard_probability_weight: float = 60.0
    score_discard_badness_mistake_weight: float = 80.0
    score_discard_hints_low_weight: float = 25.0

    # Hinting
    score_hint_focused_hint: float = 50.0
    score_hint_exponent_information_gain: int = 1
    score_hint_information_gain: float = 1.5
    score_hint_make_playable: float = 100.0
    score_hint_make_discardable: float = 20.0

    # Penalties
    score_badness_discard_only_card_left_of_its_kind: float = 5000.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> RobertParams:
        """Build params from a dict, ignoring unknown keys and bad values.

        Exponent fields are converted to int, all others to float.
        """
        types = {f.name: f.type for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, raw in values.items():
            if key not in types:
                logger.warning(f"Unknown Robert parameter '{key}' ignored")
                continue
            convert = int if types[key] in (int, "int") else float
            try:
                kwargs[key] = convert(raw)
            except (TypeError, ValueError):
                logger.warning(f"Could not parse {key} = {raw!r}; keeping default")
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> RobertParams:
        """Load ``key = value`` lines from a file.

        The file uses dotenv syntax, so ``#`` comments are allowed. A missing
        file gives the defaults.
        """
        path = Path(path)
        if not path.exists():
            logger.debug(f"No parameter file at {path}, using defaults")
            return cls()

        values = dotenv_values(path)
        logger.info(f"Loaded {len(values)} Robert parameters from {path}")
        return cls.from_mapping(values)


def play_probability_score(
    probability: float,
    mistakes_made: int,
    only_copy_left: float,
    params: RobertParams,
    focused: bool = False,
) -> float:
    """The part of a Play score that depends on the playability estimate.

    Returns 0 for any uncertain play with two mistakes already made.
    """
    score = params.score_play_focused_hint if focused else 0.0

    if probability < CERTAIN and mistakes_made == 2:
        return 0.0

    score += probability**params.score_play_exponent_probability * (
        params.score_play_by_playability_weight
    )
    if probability > CERTAIN:
        score += params.score_play_sure

    miss = 1.0 - probability
    score -= miss * (mistakes_made + MISTAKE_OFFSET) * params.score_play_badness_mistake_weight
    score -= miss * only_copy_left * params.score_badness_discard_only_card_left_of_its_kind
    return score


def discard_probability_score(
    probability: float,
    hints_remaining: int,
    only_copy_left: float,
    params: RobertParams,
) -> float:
    """Score of a discard, never below 0."""
    score = probability**params.score_discard_exponent_probability * (
        params.score_discard_probability_weight
    )
    score += (MAX_HINTS - hints_remaining) * params.score_discard_hints_low_weight

    miss = 1.0 - probability
    score -= miss * params.score_discard_badness_mistake_weight
    score -= miss * only_copy_left * params.score_badness_discard_only_card_left_of_its_kind
    return max(score, 0.0)


def information_gain_score(excluded: int, possible: int, params: RobertParams) -> float:
    """Value of ruling ``excluded`` of ``possible`` identities out of a slot."""
    if possible == 0:
        return 0.0
    gain = 1.0 + excluded / possible * params.score_hint_information_gain
    return gain**params.score_hint_exponent_information_gain - 1.0


class RobertStrategy(Strategy):
    """Scores every legal move and picks the highest.

    Ties go to the move enumerated first; NaN scores never win.
    """

    def __init__(self, params: RobertParams | None = None):
        self.params = params or RobertParams()
        self.knowledge = KnowledgeTracker()
        self.focused_hint: int | None = None

    @property
    def name(self) -> str:
        return "Robert"

    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        self.knowledge.initialize(partner_hand)

    def decide_move(self) -> Move:
        legal_moves = self.knowledge.legal_moves()
        if not legal_moves:
            raise ValueError("No legal moves available")

        best_move = legal_moves[0]
        best_score = -math.inf
        for move in legal_moves:
            score = self.score_move(move)
            logger.debug(f"{move}: {score:.3f}")
            if math.isnan(score):
                continue
            if score > best_score:
                best_move, best_score = move, score
        return best_move

    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        self.knowledge.apply_own_move(move, result, drew_replacement)
        if isinstance(move, (Play, Discard)):
            self._slot_removed(move.index)

    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        self.knowledge.apply_partner_move(move, result)
        if isinstance(result, HintResult) and len(result.indices) == 1:
            self.focused_hint = result.indices[0]

    def _slot_removed(self, index: int) -> None:
        if self.focused_hint is None:
            return
        if self.focused_hint == index:
            self.focused_hint = None
        elif self.focused_hint > index:
            self.focused_hint -= 1

    # --- scoring ---

    def score_move(self, move: Move) -> float:
        """Weighted score of a legal move; higher is better."""
        match move:
            case Play(index=index):
                return self.score_play(index) * self.params.score_play_base
            case Discard(index=index):
                return self.score_discard(index) * self.params.score_discard_base
            case Hint():
                return self.score_hint(move) * self.params.score_hint_base
            case _:
                raise ValueError(f"Cannot score {move!r}")

    def score_play(self, index: int) -> float:
        k = self.knowledge
        p = k.my_playable_probability(index)
        score = play_probability_score(
            p,
            k.mistakes_made,
            k.only_copy_left_probability(index),
            self.params,
            focused=self.focused_hint == index,
        )
        card = k.exact_card(index)
        if card is None or not k.is_playable(card):
            return score
        if card.value == MAX_VALUE:
            return score + self.params.score_play_can_play_5_sure
        return score + self._unlock_bonus(card)

    def _unlock_bonus(self, card: Card) -> float:
        """Bonus for partner cards our known playable card would unlock."""
        k = self.knowledge
        after = list(k.fireworks)
        after[card.color] += 1
        next_value = after[card.color] + 1

        bonus = 0.0
        for i, partner_card in enumerate(k.partner_hand):
            if partner_card.color != card.color:
                continue
            if partner_card.value == next_value:
                bonus += self.params.score_play_make_playable
                bonus += k.partner_playable_probability(i, fireworks=after) * (
                    self.params.score_play_make_playable_weighted_by_partner_knowledge
                )
            elif partner_card.value == card.value:
                bonus += self.params.score_play_make_discardable
                bonus += k.partner_discardable_probability(i, fireworks=after) * (
                    self.params.score_play_make_discardable_weighted_by_partner_knowledge
                )
        return bonus

    def score_discard(self, index: int) -> float:
        k = self.knowledge
        return discard_probability_score(
            k.my_discardable_probability(index),
            k.hints_remaining,
            k.only_copy_left_probability(index),
            self.params,
        )

    def score_hint(self, hint: Hint) -> float:
        k = self.knowledge
        touched = [i for i, card in enumerate(k.partner_hand) if hint.matches(card)]
        if not touched:
            return -math.inf

        score = 0.0
        for i in range(len(k.partner_hand)):
            before = k.partner_possibilities(i)
            after = k.partner_possibilities(i, hint)
            score += information_gain_score(
                before.count() - after.count(), before.count(), self.params
            )

        if len(touched) == 1:
            index = touched[0]
            target = k.partner_hand[index]
            next_value = k.fireworks[target.color] + 1
            if target.value == next_value:
                if k.partner_playable_probability(index) < PARTNER_KNOWS:
                    score += self.params.score_hint_focused_hint
            elif target.value > next_value:
                score -= self.params.score_hint_focused_hint

        for i in range(len(k.partner_hand)):
            if (
                k.partner_playable_probability(i, hint) > PARTNER_KNOWS
                and k.partner_playable_probability(i) < PARTNER_KNOWS
            ):
                score += self.params.score_hint_make_playable
            if (
                k.partner_discardable_probability(i, hint) > PARTNER_KNOWS
                and k.partner_discardable_probability(i) < PARTNER_KNOWS
            ):
                score += self.params.score_hint_make_discardable

        return score


__all__ = [
    "RobertParams",
    "RobertStrategy",
    "discard_probability_score",
    "information_gain_score",
    "play_probability_score",
]
