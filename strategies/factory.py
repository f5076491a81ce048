"""Name-based registry for creating strategies."""

from __future__ import annotations

import logging
from typing import Any

from strategies.base import Strategy
from strategies.conventions import ConventionStrategy
from strategies.human import HumanStrategy
from strategies.omniscient import OmniscientStrategy
from strategies.random_strategy import RandomStrategy
from strategies.robert import RobertParams, RobertStrategy

logger = logging.getLogger(__name__)


class StrategyFactory:
    """Factory for creating strategy instances."""

    AVAILABLE_STRATEGIES = {
        "robert": "Robert - scores every move by weighted probabilities",
        "conventions": "Conventions - fixed priority list of common conventions",
        "random": "Random - uniform choice over legal moves",
        "random-play": "Random play - only ever plays a random card",
        "omniscient": "Omniscient - sees every card (upper bound, not fair play)",
        "human": "Human - reads moves from the terminal",
    }

    @staticmethod
    def create(
        name: str, params: dict[str, Any] | None = None, seed: int | None = None
    ) -> Strategy:
        """Create a strategy instance by name.

        Args:
            name: Strategy name (robert, conventions, random, random-play,
                omniscient, human).
            params: Optional strategy-specific parameters. ``robert`` takes
                RobertParams fields or ``params_file``; the random strategies
                take ``seed``.
            seed: Default seed for strategies that use randomness.

        Returns:
            Strategy instance.

        Raises:
            ValueError: If the name is unknown.
        """
        params = dict(params or {})

        match name:
            case "robert":
                params_file = params.pop("params_file", None)
                if params_file is not None:
                    robert_params = RobertParams.from_file(params_file)
                else:
                    robert_params = RobertParams.from_mapping(params)
                return RobertStrategy(robert_params)
            case "conventions":
                return ConventionStrategy()
            case "random":
                return RandomStrategy(seed=params.get("seed", seed))
            case "random-play":
                return RandomStrategy(seed=params.get("seed", seed), play_only=True)
            case "omniscient":
                return OmniscientStrategy()
            case "human":
                return HumanStrategy()
            case _:
                raise ValueError(
                    f"Unknown strategy: {name}. Available: {list(StrategyFactory.AVAILABLE_STRATEGIES)}"
                )

    @staticmethod
    def list_strategies() -> list[dict[str, str]]:
        return [
            {"name": name, "description": desc}
            for name, desc in StrategyFactory.AVAILABLE_STRATEGIES.items()
        ]

    @staticmethod
    def matching(selector: str) -> list[str]:
        """Registered names equal to ``selector`` or containing it as a word.

        ``play`` selects ``random-play``; ``random`` selects ``random`` and
        ``random-play``.
        """
        selector = selector.strip().lower()
        matches = [
            name
            for name in StrategyFactory.AVAILABLE_STRATEGIES
            if name == selector or selector in name.split("-")
        ]
        if not matches:
            logger.warning(f"No strategy matches '{selector}'")
        return matches
