"""Key dispatch pipeline."""

from .base import DispatchResult, SessionControl, Stage
from .dispatcher import KeyDispatcher
from .navigation import CandidateNavigator, digit_to_position

__all__ = [
    "CandidateNavigator",
    "DispatchResult",
    "KeyDispatcher",
    "SessionControl",
    "Stage",
    "digit_to_position",
]
