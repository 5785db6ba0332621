"""Syllable composers consumed by the engine as opaque collaborators."""

from .base import (
    Composer,
    TransitionPredicate,
    allow_all,
    strict_order,
    transition_predicate,
)
from .dubeolsik import DEFAULT_KEYBOARD, DubeolsikComposer

__all__ = [
    "Composer",
    "DEFAULT_KEYBOARD",
    "DubeolsikComposer",
    "TransitionPredicate",
    "allow_all",
    "strict_order",
    "transition_predicate",
]
