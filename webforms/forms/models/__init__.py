"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .result import VALIDATION_OK, ValidationResult

__all__ = [
    "VALIDATION_OK",
    "ValidationResult",
]
