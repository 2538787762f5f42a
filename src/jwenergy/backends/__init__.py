"""Execution backends for jwenergy."""

from jwenergy.backends.base import Backend
from jwenergy.backends.register import QubitRegister
from jwenergy.backends.statevector import StatevectorBackend

__all__ = ["Backend", "QubitRegister", "StatevectorBackend"]
