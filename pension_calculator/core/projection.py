from __future__ import annotations

import math
import sys
from typing import List

from pension_calculator.core.limits import MONTHS_PER_YEAR, SAFE_WITHDRAWAL_RATE
from pension_calculator.schemas.calculator import CalculatorInputs, PensionSummary, ProjectionPoint

_LARGEST_AMOUNT = sys.float_info.max


def _saturate(amount: float) -> float:
    """Pin overflowed amounts to the largest finite float; NaN becomes 0."""
    if math.isnan(amount):
        return 0.0
    return max(-_LARGEST_AMOUNT, min(amount, _LARGEST_AMOUNT))


def round_currency(amount: float) -> int:
    """Round half up to a whole euro (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(_saturate(amount) + 0.5))


def project_pension(inputs: CalculatorInputs) -> List[ProjectionPoint]:
    """
    Build one point per year from currentAge..retirementAge (inclusive).

    Order of operations (per year):
      1) Return for the year on the balance at the START of the year.
      2) Add the full annual contribution (it earns nothing this year).
      3) Record capital, amount paid in so far, and the difference.

    Paid-in amounts at offset N count N years of contributions while the
    capital already includes the contribution for year N, so the first point
    shows one year of growth on top of the start capital.

    realCapital discounts the capital by inflation over the elapsed years.
    Inputs are trusted; a retirement age at or below the current age gives
    at most one point. Amounts beyond the float range are held at the largest
    finite value so the loop always completes.
    """
    annual_contribution = _saturate(inputs.monthlyContribution * MONTHS_PER_YEAR)
    rate = inputs.expectedReturn / 100
    inflation = inputs.inflationRate / 100

    capital = _saturate(float(inputs.startCapital))
    points: List[ProjectionPoint] = []

    for offset in range(inputs.retirementAge - inputs.currentAge + 1):
        total_invested = _saturate(inputs.startCapital + annual_contribution * offset)
        year_return = capital * rate
        capital = _saturate(capital + annual_contribution + year_return)
        price_level = (1 + inflation) ** (offset + 1)

        points.append(
            ProjectionPoint(
                year=inputs.currentAge + offset,
                capital=round_currency(capital),
                contributions=round_currency(total_invested),
                returns=round_currency(capital - total_invested),
                realCapital=round_currency(capital / price_level),
            )
        )

    return points


def monthly_pension(final_capital: float) -> int:
    """Monthly payout under the 4% safe-withdrawal heuristic."""
    return round_currency(final_capital * SAFE_WITHDRAWAL_RATE / MONTHS_PER_YEAR)


def summarize_projection(points: List[ProjectionPoint]) -> PensionSummary:
    if not points:
        return PensionSummary(
            finalCapital=0,
            totalContributions=0,
            totalReturns=0,
            monthlyPension=0,
            returnPercentage=0.0,
            yearsToRetirement=0,
            realFinalCapital=0,
            realMonthlyPension=0,
        )

    last = points[-1]
    percentage = last.returns / last.contributions * 100 if last.contributions else 0.0
    return PensionSummary(
        finalCapital=last.capital,
        totalContributions=last.contributions,
        totalReturns=last.returns,
        monthlyPension=monthly_pension(last.capital),
        returnPercentage=percentage,
        yearsToRetirement=last.year - points[0].year,
        realFinalCapital=last.realCapital,
        realMonthlyPension=monthly_pension(last.realCapital),
    )
