"""Reinsertion exports."""

from .managed_attributes import MANAGED_ATTRIBUTES, strip_managed_attributes
from .reinsertion_outcomes import ReinsertionResult
from .translation_applier import apply_translations

__all__ = [
    "MANAGED_ATTRIBUTES",
    "ReinsertionResult",
    "apply_translations",
    "strip_managed_attributes",
]
