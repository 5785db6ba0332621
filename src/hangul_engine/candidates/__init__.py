"""Hanja and symbol candidates: tables, lookup and the paged list."""

from .dictionary import Candidate, HanjaTable, load_default_tables
from .resolver import (
    CandidateResolver,
    CandidateSet,
    LookupMethod,
    LookupRequest,
    derive_lookup_key,
)
from .table import LookupTable, Orientation

__all__ = [
    "Candidate",
    "CandidateResolver",
    "CandidateSet",
    "HanjaTable",
    "LookupMethod",
    "LookupRequest",
    "LookupTable",
    "Orientation",
    "derive_lookup_key",
    "load_default_tables",
]
