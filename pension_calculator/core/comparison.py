"""Product catalogue and selection rules for the comparison page.

The API serves the catalogue, radar and comparison rows. ``add_product``,
``remove_product`` and ``restore_product`` are library helpers for callers
that keep the selection and undo state themselves; no endpoint uses them.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

from pension_calculator.core.messages import DEFAULT_LANGUAGE, Language
from pension_calculator.schemas.calculator import ProductType
from pension_calculator.schemas.comparison import (
    MAX_SELECTED_PRODUCTS,
    ComparisonRow,
    Product,
    RadarRow,
)

# ratings are language independent
_RATINGS: Dict[ProductType, Dict[str, float]] = {
    ProductType.RIESTER: {
        "monthlyContribution": 175,
        "expectedReturn": 4.5,
        "taxBenefit": 9,
        "flexibility": 5,
        "guarantee": 8,
        "costs": 6,
    },
    ProductType.RUERUP: {
        "monthlyContribution": 300,
        "expectedReturn": 5.2,
        "taxBenefit": 10,
        "flexibility": 3,
        "guarantee": 7,
        "costs": 7,
    },
    ProductType.PRIVATE: {
        "monthlyContribution": 250,
        "expectedReturn": 7.5,
        "taxBenefit": 3,
        "flexibility": 10,
        "guarantee": 4,
        "costs": 5,
    },
    ProductType.OCCUPATIONAL: {
        "monthlyContribution": 200,
        "expectedReturn": 5.8,
        "taxBenefit": 8,
        "flexibility": 6,
        "guarantee": 9,
        "costs": 4,
    },
}

_TEXTS: Dict[Language, Dict[ProductType, Dict[str, object]]] = {
    "de": {
        ProductType.RIESTER: {
            "name": "Riester-Rente",
            "type": "Staatlich gefördert",
            "features": ["Staatliche Zulagen", "Steuervorteile", "Garantierte Beiträge"],
            "pros": ["Hohe staatliche Förderung", "Beitragsgarantie", "Pfändungsschutz"],
            "cons": ["Begrenzte Flexibilität", "Niedrige Rendite", "Komplexe Förderlogik"],
        },
        ProductType.RUERUP: {
            "name": "Rürup-Rente",
            "type": "Steuerbegünstigt",
            "features": ["Hohe Steuerersparnis", "Für Selbstständige", "Insolvenzschutz"],
            "pros": ["Maximale Steuerersparnis", "Ideal für Selbstständige", "Hoher Insolvenzschutz"],
            "cons": ["Keine Kapitalauszahlung", "Nicht vererbbar", "Keine vorzeitige Kündigung"],
        },
        ProductType.PRIVATE: {
            "name": "Private Rente",
            "type": "Flexibel",
            "features": ["Maximale Flexibilität", "Weltweite Investments", "Vererbbar"],
            "pros": ["Höchste Renditechance", "Volle Kontrolle", "Jederzeit kündbar"],
            "cons": ["Keine staatliche Förderung", "Höheres Risiko", "Kapitalertragssteuer"],
        },
        ProductType.OCCUPATIONAL: {
            "name": "Betriebsrente",
            "type": "Arbeitgeber-gefördert",
            "features": ["Arbeitgeberzuschuss", "Sozialabgabenfrei", "Insolvenzgeschützt"],
            "pros": ["Arbeitgeber-Beteiligung", "Steuer- und Sozialabgabenfrei", "Hohe Sicherheit"],
            "cons": ["An Arbeitgeber gebunden", "Eingeschränkte Portabilität", "Begrenzte Wahlmöglichkeiten"],
        },
    },
    "en": {
        ProductType.RIESTER: {
            "name": "Riester Pension",
            "type": "Government-subsidized",
            "features": ["State subsidies", "Tax benefits", "Guaranteed contributions"],
            "pros": ["High government support", "Contribution guarantee", "Protection from seizure"],
            "cons": ["Limited flexibility", "Low returns", "Complex subsidy logic"],
        },
        ProductType.RUERUP: {
            "name": "Rürup Pension",
            "type": "Tax-advantaged",
            "features": ["High tax savings", "For self-employed", "Bankruptcy protection"],
            "pros": ["Maximum tax savings", "Ideal for self-employed", "High bankruptcy protection"],
            "cons": ["No capital payout", "Not inheritable", "No early termination"],
        },
        ProductType.PRIVATE: {
            "name": "Private Pension",
            "type": "Flexible",
            "features": ["Maximum flexibility", "Global investments", "Inheritable"],
            "pros": ["Highest return potential", "Full control", "Cancellable anytime"],
            "cons": ["No government support", "Higher risk", "Capital gains tax"],
        },
        ProductType.OCCUPATIONAL: {
            "name": "Occupational Pension",
            "type": "Employer-sponsored",
            "features": ["Employer contribution", "Social security exempt", "Insolvency protected"],
            "pros": ["Employer participation", "Tax and social security exempt", "High security"],
            "cons": ["Tied to employer", "Limited portability", "Limited choices"],
        },
    },
}

_METRIC_LABELS: Dict[Language, Dict[str, str]] = {
    "de": {
        "expectedReturn": "Erwartete Rendite",
        "taxBenefit": "Steuervorteil",
        "flexibility": "Flexibilität",
        "guarantee": "Garantie",
        "costs": "Kosten",
    },
    "en": {
        "expectedReturn": "Expected Return",
        "taxBenefit": "Tax Benefit",
        "flexibility": "Flexibility",
        "guarantee": "Guarantee",
        "costs": "Costs",
    },
}

RADAR_METRICS = ("expectedReturn", "taxBenefit", "flexibility", "guarantee", "costs")


def product_catalog(language: Language = DEFAULT_LANGUAGE) -> Dict[ProductType, Product]:
    return {
        product_id: Product(id=product_id, **ratings, **_TEXTS[language][product_id])
        for product_id, ratings in _RATINGS.items()
    }


def radar_rows(selected: Sequence[ProductType], language: Language = DEFAULT_LANGUAGE) -> List[RadarRow]:
    """One row per metric; costs are inverted so that higher is better on every axis."""
    catalog = product_catalog(language)
    rows: List[RadarRow] = []
    for metric in RADAR_METRICS:
        values: Dict[ProductType, Union[int, float]] = {}
        for product_id in selected:
            value = getattr(catalog[product_id], metric)
            values[product_id] = 10 - value if metric == "costs" else value
        rows.append(RadarRow(metric=_METRIC_LABELS[language][metric], values=values))
    return rows


def comparison_rows(
    selected: Sequence[ProductType], language: Language = DEFAULT_LANGUAGE
) -> List[ComparisonRow]:
    catalog = product_catalog(language)
    return [
        ComparisonRow(
            id=product_id,
            name=catalog[product_id].name,
            contribution=catalog[product_id].monthlyContribution,
            expectedReturn=catalog[product_id].expectedReturn,
        )
        for product_id in selected
    ]


def add_product(selected: Sequence[ProductType], product_id: ProductType) -> List[ProductType]:
    """Append ``product_id`` unless it is already selected or the list is full."""
    if product_id in selected or len(selected) >= MAX_SELECTED_PRODUCTS:
        return list(selected)
    return [*selected, product_id]


def remove_product(
    selected: Sequence[ProductType], product_id: ProductType
) -> Tuple[List[ProductType], Optional[Tuple[ProductType, int]]]:
    """Drop ``product_id`` while keeping at least one product.

    Returns the new selection and ``(product_id, index)`` for undo, or ``None``
    when nothing was removed.
    """
    if len(selected) <= 1 or product_id not in selected:
        return list(selected), None
    index = list(selected).index(product_id)
    remaining = [item for item in selected if item != product_id]
    return remaining, (product_id, index)


def restore_product(
    selected: Sequence[ProductType], removed: Optional[Tuple[ProductType, int]]
) -> List[ProductType]:
    if removed is None:
        return list(selected)
    product_id, index = removed
    if product_id in selected:
        return list(selected)
    restored = list(selected)
    restored.insert(index, product_id)
    return restored
