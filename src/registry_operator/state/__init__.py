"""Registry state machine: phase handlers and the reconciler."""

from .base import BaseHandler, ReconcileCancelledError
from .phases import DeletingHandler, PendingHandler, RunningHandler
from .reconciler import Reconciler

__all__ = [
    "BaseHandler",
    "ReconcileCancelledError",
    "PendingHandler",
    "RunningHandler",
    "DeletingHandler",
    "Reconciler",
]
