"""Exceptions raised by the pension calculator."""

from __future__ import annotations

from typing import List, Optional

from pension_calculator.schemas.calculator import ValidationResult


class PensionCalculatorError(Exception):
    """Base exception for calculator errors."""


class InputValidationError(PensionCalculatorError, ValueError):
    """Inputs failed one or more validation rules."""

    def __init__(self, failures: List[ValidationResult]):
        messages = [failure.error or "invalid input" for failure in failures]
        super().__init__("; ".join(messages))
        self.failures = failures

    @property
    def first_error(self) -> Optional[str]:
        return self.failures[0].error if self.failures else None


class ExportError(PensionCalculatorError):
    """An export or share action could not be completed."""


class ConfigurationError(PensionCalculatorError):
    """Raised when the configuration file cannot be loaded or parsed."""
