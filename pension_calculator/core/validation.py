"""Input validation for the pension calculator.

Every rule returns a fresh :class:`ValidationResult`. The calculator collects
only the failing ones, so an empty list means the inputs are fully valid.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pension_calculator.core import limits
from pension_calculator.core.messages import DEFAULT_LANGUAGE, Language, field_label, translate
from pension_calculator.schemas.calculator import CalculatorInputs, ProductType, ValidationResult

VALID = ValidationResult(isValid=True)

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(frozen=True)
class ValidationRule:
    min: Optional[float] = None
    max: Optional[float] = None
    required: bool = False
    custom: Optional[Callable[[float], bool]] = None


def _failure(message: str, field: Optional[str], advisory: bool = False) -> ValidationResult:
    return ValidationResult(isValid=False, error=message, field=field, advisory=advisory)


def validate_number(
    value: Optional[float],
    rule: ValidationRule,
    field_name: str = "Value",
    language: Language = DEFAULT_LANGUAGE,
    field: Optional[str] = None,
) -> ValidationResult:
    """Check ``value`` against ``rule``; the first violated check wins."""
    if value is None:
        if rule.required:
            return _failure(translate("required", language, field=field_name), field)
        return VALID

    # infinities are no more usable than NaN
    if isinstance(value, float) and not math.isfinite(value):
        return _failure(translate("not_a_number", language, field=field_name), field)

    if rule.min is not None and value < rule.min:
        return _failure(translate("at_least", language, field=field_name, min=rule.min), field)

    if rule.max is not None and value > rule.max:
        return _failure(translate("at_most", language, field=field_name, max=rule.max), field)

    if rule.custom is not None and not rule.custom(value):
        return _failure(translate("invalid", language, field=field_name), field)

    return VALID


def validate_retirement_age(
    current_age: int,
    retirement_age: int,
    language: Language = DEFAULT_LANGUAGE,
) -> ValidationResult:
    field = "retirementAge"
    if retirement_age <= current_age:
        return _failure(translate("retirement_after_current", language), field)

    if retirement_age < limits.MIN_RETIREMENT_AGE:
        return _failure(translate("retirement_min", language, min=limits.MIN_RETIREMENT_AGE), field)

    if retirement_age > limits.MAX_AGE:
        return _failure(translate("retirement_max", language, max=limits.MAX_AGE), field)

    return VALID


def validate_ruerup_contribution(
    monthly_contribution: float, language: Language = DEFAULT_LANGUAGE
) -> ValidationResult:
    annual_contribution = monthly_contribution * limits.MONTHS_PER_YEAR
    if annual_contribution > limits.RUERUP_MAX_ANNUAL:
        return _failure(
            translate(
                "ruerup_max",
                language,
                monthly=limits.RUERUP_MAX_MONTHLY,
                annual=limits.RUERUP_MAX_ANNUAL,
            ),
            "monthlyContribution",
        )
    return VALID


def validate_riester_contribution(
    monthly_contribution: float, language: Language = DEFAULT_LANGUAGE
) -> ValidationResult:
    annual_contribution = monthly_contribution * limits.MONTHS_PER_YEAR
    if annual_contribution < limits.RIESTER_MIN_ANNUAL:
        return _failure(
            translate("riester_min", language, annual=limits.RIESTER_MIN_ANNUAL),
            "monthlyContribution",
        )
    return VALID


def validate_occupational_contribution(
    monthly_contribution: float, language: Language = DEFAULT_LANGUAGE
) -> ValidationResult:
    """Amounts above the social-security exempt cap only produce a notice."""
    if monthly_contribution > limits.OCCUPATIONAL_TAX_FREE_MONTHLY:
        return _failure(
            translate("occupational_notice", language, monthly=limits.OCCUPATIONAL_TAX_FREE_MONTHLY),
            "monthlyContribution",
            advisory=True,
        )
    return VALID


def validate_private_contribution(
    monthly_contribution: float, language: Language = DEFAULT_LANGUAGE
) -> ValidationResult:
    return validate_number(
        monthly_contribution,
        ValidationRule(min=0, max=limits.MAX_MONTHLY_CONTRIBUTION, required=True),
        field_label("monthlyContribution", language),
        language,
        field="monthlyContribution",
    )


CONTRIBUTION_RULES: Dict[ProductType, Callable[[float, Language], ValidationResult]] = {
    ProductType.PRIVATE: validate_private_contribution,
    ProductType.RIESTER: validate_riester_contribution,
    ProductType.RUERUP: validate_ruerup_contribution,
    ProductType.OCCUPATIONAL: validate_occupational_contribution,
}


def _validate_field(
    inputs: CalculatorInputs, field: str, rule: ValidationRule, language: Language
) -> ValidationResult:
    return validate_number(getattr(inputs, field), rule, field_label(field, language), language, field=field)


def validate_calculator_inputs(
    inputs: CalculatorInputs,
    product_type: ProductType = ProductType.PRIVATE,
    language: Language = DEFAULT_LANGUAGE,
) -> List[ValidationResult]:
    """Run every calculator rule and return the failures in field order."""
    results = [
        _validate_field(
            inputs,
            "currentAge",
            ValidationRule(min=limits.MIN_CURRENT_AGE, max=limits.MAX_AGE, required=True),
            language,
        ),
        validate_retirement_age(inputs.currentAge, inputs.retirementAge, language),
        CONTRIBUTION_RULES[ProductType(product_type)](inputs.monthlyContribution, language),
        _validate_field(
            inputs,
            "startCapital",
            ValidationRule(min=0, max=limits.MAX_START_CAPITAL, required=True),
            language,
        ),
        _validate_field(
            inputs,
            "expectedReturn",
            ValidationRule(min=0, max=limits.MAX_EXPECTED_RETURN, required=True),
            language,
        ),
        _validate_field(
            inputs,
            "inflationRate",
            ValidationRule(min=0, max=limits.MAX_INFLATION_RATE, required=True),
            language,
        ),
    ]
    return [result for result in results if not result.isValid]


def blocking_failures(
    failures: List[ValidationResult], advisory_blocks: bool = True
) -> List[ValidationResult]:
    if advisory_blocks:
        return list(failures)
    return [failure for failure in failures if not failure.advisory]


def sanitize_number_input(value: Any) -> float:
    """Coerce anything to a non-negative number; non-numeric input becomes 0.

    Strings must be plain decimals (``"42.5"``, ``"-5"``, ``"1e3"``). Spellings
    like ``"inf"``, ``"nan"`` or ``"1_000"`` count as non-numeric, and so does
    any non-finite result.
    """
    if isinstance(value, bool):
        value = int(value)
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not _DECIMAL.fullmatch(value):
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def clamp_number(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)
