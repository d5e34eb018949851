"""Data contracts for the product comparison."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pension_calculator.core.messages import Language
from pension_calculator.schemas.calculator import ProductType

DEFAULT_SELECTION = [ProductType.RIESTER, ProductType.RUERUP, ProductType.PRIVATE]
MAX_SELECTED_PRODUCTS = 4


class Product(BaseModel):
    """Static description of one pension product. Ratings use a 0-10 scale."""

    id: ProductType
    name: str
    type: str
    monthlyContribution: float
    expectedReturn: float
    taxBenefit: int = Field(..., ge=0, le=10)
    flexibility: int = Field(..., ge=0, le=10)
    guarantee: int = Field(..., ge=0, le=10)
    costs: int = Field(..., ge=0, le=10)
    features: List[str]
    pros: List[str]
    cons: List[str]


class RadarRow(BaseModel):
    metric: str
    values: Dict[ProductType, Union[int, float]]


class ComparisonRow(BaseModel):
    id: ProductType
    name: str
    contribution: float
    expectedReturn: float


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    selectedProducts: List[ProductType] = Field(
        default_factory=lambda: list(DEFAULT_SELECTION),
        min_length=1,
        max_length=MAX_SELECTED_PRODUCTS,
    )
    language: Optional[Language] = None
    url: Optional[str] = None

    @field_validator("selectedProducts")
    @classmethod
    def _unique(cls, value: List[ProductType]) -> List[ProductType]:
        if len(set(value)) != len(value):
            raise ValueError("selectedProducts must not contain duplicates")
        return value


class ComparisonResponse(BaseModel):
    selectedProducts: List[ProductType]
    products: List[Product]
    radar: List[RadarRow]
    comparison: List[ComparisonRow]
