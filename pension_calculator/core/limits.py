"""German pension contribution limits (2024) and calculator bounds."""

from __future__ import annotations

from typing import Dict

MONTHS_PER_YEAR: int = 12
SAFE_WITHDRAWAL_RATE: float = 0.04

# Rürup-Rente (§10a EStG)
RUERUP_MAX_ANNUAL: int = 27566
RUERUP_MAX_MONTHLY: int = RUERUP_MAX_ANNUAL // MONTHS_PER_YEAR  # 2297
RUERUP_DEDUCTIBLE_RATE: float = 0.96

# Riester-Rente
RIESTER_MIN_ANNUAL: int = 60
RIESTER_MIN_MONTHLY: int = 5
RIESTER_MAX_PERCENT_INCOME: float = 0.04
RIESTER_BASIC_ALLOWANCE: int = 175
RIESTER_CHILD_ALLOWANCE_NEW: int = 300  # per child born after 2008
RIESTER_CHILD_ALLOWANCE_OLD: int = 185

# Betriebliche Altersvorsorge, social security exempt up to 8% of the BBG
OCCUPATIONAL_TAX_FREE_MONTHLY: int = 584
OCCUPATIONAL_TAX_FREE_ANNUAL: int = OCCUPATIONAL_TAX_FREE_MONTHLY * MONTHS_PER_YEAR

MIN_CURRENT_AGE: int = 18
MAX_AGE: int = 75
MIN_RETIREMENT_AGE: int = 55
STANDARD_RETIREMENT_AGE: int = 67
MAX_MONTHLY_CONTRIBUTION: int = 5000
MAX_START_CAPITAL: int = 1_000_000

# percentages
MAX_EXPECTED_RETURN: float = 15
MAX_INFLATION_RATE: float = 10


def limits_as_dict() -> Dict[str, float]:
    """Return the limit table keyed by constant name."""
    return {
        "RUERUP_MAX_ANNUAL": RUERUP_MAX_ANNUAL,
        "RUERUP_MAX_MONTHLY": RUERUP_MAX_MONTHLY,
        "RUERUP_DEDUCTIBLE_RATE": RUERUP_DEDUCTIBLE_RATE,
        "RIESTER_MIN_ANNUAL": RIESTER_MIN_ANNUAL,
        "RIESTER_MIN_MONTHLY": RIESTER_MIN_MONTHLY,
        "RIESTER_MAX_PERCENT_INCOME": RIESTER_MAX_PERCENT_INCOME,
        "RIESTER_BASIC_ALLOWANCE": RIESTER_BASIC_ALLOWANCE,
        "RIESTER_CHILD_ALLOWANCE_NEW": RIESTER_CHILD_ALLOWANCE_NEW,
        "RIESTER_CHILD_ALLOWANCE_OLD": RIESTER_CHILD_ALLOWANCE_OLD,
        "OCCUPATIONAL_TAX_FREE_MONTHLY": OCCUPATIONAL_TAX_FREE_MONTHLY,
        "OCCUPATIONAL_TAX_FREE_ANNUAL": OCCUPATIONAL_TAX_FREE_ANNUAL,
        "MIN_CURRENT_AGE": MIN_CURRENT_AGE,
        "MAX_AGE": MAX_AGE,
        "MIN_RETIREMENT_AGE": MIN_RETIREMENT_AGE,
        "STANDARD_RETIREMENT_AGE": STANDARD_RETIREMENT_AGE,
        "MAX_MONTHLY_CONTRIBUTION": MAX_MONTHLY_CONTRIBUTION,
        "MAX_START_CAPITAL": MAX_START_CAPITAL,
        "MAX_EXPECTED_RETURN": MAX_EXPECTED_RETURN,
        "MAX_INFLATION_RATE": MAX_INFLATION_RATE,
        "SAFE_WITHDRAWAL_RATE": SAFE_WITHDRAWAL_RATE,
    }
