"""Game strategies for Hanabi."""

from strategies.base import Strategy
from strategies.knowledge import KnowledgeTracker
from strategies.robert import RobertParams, RobertStrategy
from strategies.conventions import ConventionStrategy
from strategies.random_strategy import RandomStrategy
from strategies.omniscient import OmniscientStrategy
from strategies.human import HumanQuit, HumanStrategy
from strategies.factory import StrategyFactory

__all__ = [
    "Strategy",
    "KnowledgeTracker",
    "RobertParams",
    "RobertStrategy",
    "ConventionStrategy",
    "RandomStrategy",
    "OmniscientStrategy",
    "HumanQuit",
    "HumanStrategy",
    "StrategyFactory",
]
