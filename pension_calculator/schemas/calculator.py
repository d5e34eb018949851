"""Data contracts for the pension calculator."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pension_calculator.core.messages import Language


class ProductType(str, Enum):
    PRIVATE = "private"
    RIESTER = "riester"
    RUERUP = "ruerup"
    OCCUPATIONAL = "occupational"

    @classmethod
    def resolve(cls, value: object) -> "ProductType":
        """Map a product id or calculator tab id to a product type.

        Unknown and empty values fall back to the private pension, like the
        calculator page does for an unrecognised tab.
        """
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        return PRODUCT_ALIASES.get(key, cls.PRIVATE)


PRODUCT_ALIASES = {
    "private": ProductType.PRIVATE,
    "private-pension": ProductType.PRIVATE,
    "riester": ProductType.RIESTER,
    "ruerup": ProductType.RUERUP,
    "rürup": ProductType.RUERUP,
    "occupational": ProductType.OCCUPATIONAL,
}


class CalculatorInputs(BaseModel):
    """User inputs for one calculation. Percentages are given as 6 for 6%."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    currentAge: int = Field(..., description="Age today in whole years.")
    retirementAge: int = Field(..., description="Planned retirement age.")
    monthlyContribution: float = Field(..., description="Monthly contribution in EUR.")
    startCapital: float = Field(..., description="Capital already saved in EUR.")
    expectedReturn: float = Field(..., description="Expected annual return in percent.")
    inflationRate: float = Field(..., description="Expected annual inflation in percent.")


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    isValid: bool
    error: Optional[str] = None
    field: Optional[str] = None
    # informational only; the caller decides whether it blocks
    advisory: bool = False


class ProjectionPoint(BaseModel):
    """Single year of a projection, amounts rounded to whole euros."""

    year: int
    capital: int
    contributions: int
    returns: int
    realCapital: int = Field(..., description="Capital in today's money.")


class PensionSummary(BaseModel):
    finalCapital: int
    totalContributions: int
    totalReturns: int
    monthlyPension: int
    returnPercentage: float
    yearsToRetirement: int
    realFinalCapital: int
    realMonthlyPension: int


class CalculationRequest(BaseModel):
    """Inputs plus the product whose contribution rule applies."""

    model_config = ConfigDict(extra="forbid")

    inputs: CalculatorInputs
    productType: ProductType = ProductType.PRIVATE
    language: Optional[Language] = None

    @field_validator("productType", mode="before")
    @classmethod
    def _resolve_product(cls, value: object) -> ProductType:
        return ProductType.resolve(value)


class ShareRequest(CalculationRequest):
    url: Optional[str] = None


class ValidationResponse(BaseModel):
    isValid: bool
    errors: List[ValidationResult]


class ProjectionResponse(BaseModel):
    productType: ProductType
    points: List[ProjectionPoint]
    summary: PensionSummary
    notices: List[ValidationResult] = Field(default_factory=list)


class SharePayload(BaseModel):
    title: str
    text: str
    url: Optional[str] = None
