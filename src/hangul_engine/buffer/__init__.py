"""Pending text, host boundary types and the reconciliation strategies."""

from .document import HostDocument
from .pending import PendingBuffer
from .reconcile import (
    BufferedReconciler,
    Excision,
    ImmediateReconciler,
    ReconcileMode,
    Reconciler,
    select_reconciler,
)
from .sync import (
    Capability,
    EngineProperty,
    HostClient,
    InputPurpose,
    PreeditFocusMode,
    PreeditRange,
    PreeditStyle,
    PreeditText,
    SurroundingText,
)

__all__ = [
    "BufferedReconciler",
    "Capability",
    "EngineProperty",
    "Excision",
    "HostClient",
    "HostDocument",
    "ImmediateReconciler",
    "InputPurpose",
    "PendingBuffer",
    "PreeditFocusMode",
    "PreeditRange",
    "PreeditStyle",
    "PreeditText",
    "ReconcileMode",
    "Reconciler",
    "SurroundingText",
    "select_reconciler",
]
