"""Validation and progress tracking for the Get Featured form."""

from __future__ import annotations

from .media_validation import MediaValidator
from .progress import ProgressCalculator
from .rules import CONDITIONAL_RULES, FIELD_EQUIVALENCES, ConditionalRule, FieldEquivalence
from .session import FormValidationSession, SubmissionCheck
from .validation import FieldValidator

__all__ = [
    "CONDITIONAL_RULES",
    "ConditionalRule",
    "FIELD_EQUIVALENCES",
    "FieldEquivalence",
    "FieldValidator",
    "FormValidationSession",
    "MediaValidator",
    "ProgressCalculator",
    "SubmissionCheck",
]
