"""
German and English message templates.

Templates use ``str.format`` placeholders. Numeric placeholders are rendered
without a trailing ``.0`` so that ``27566.0`` reads as ``27566``.
"""

from __future__ import annotations

from typing import Dict, Literal

Language = Literal["de", "en"]

DEFAULT_LANGUAGE: Language = "de"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    # Generic number rules
    "required": {
        "de": "{field} ist erforderlich",
        "en": "{field} is required",
    },
    "not_a_number": {
        "de": "{field} muss eine Zahl sein",
        "en": "{field} must be a number",
    },
    "at_least": {
        "de": "{field} muss mindestens {min} sein",
        "en": "{field} must be at least {min}",
    },
    "at_most": {
        "de": "{field} darf höchstens {max} sein",
        "en": "{field} must be at most {max}",
    },
    "invalid": {
        "de": "{field} ist ungültig",
        "en": "{field} is invalid",
    },
    # Retirement age
    "retirement_after_current": {
        "de": "Renteneintrittsalter muss höher als das aktuelle Alter sein",
        "en": "Retirement age must be greater than current age",
    },
    "retirement_min": {
        "de": "Renteneintrittsalter muss mindestens {min} Jahre sein",
        "en": "Retirement age must be at least {min}",
    },
    "retirement_max": {
        "de": "Renteneintrittsalter darf höchstens {max} Jahre sein",
        "en": "Retirement age must be at most {max}",
    },
    # Product specific contribution rules
    "ruerup_max": {
        "de": "Rürup-Beitrag darf höchstens {monthly}€/Monat sein ({annual}€/Jahr)",
        "en": "Rürup contribution must be at most {monthly}€/month ({annual}€/year)",
    },
    "riester_min": {
        "de": "Riester-Beitrag muss mindestens {annual}€/Jahr sein",
        "en": "Riester contribution must be at least {annual}€/year",
    },
    "occupational_notice": {
        "de": "Hinweis: Beiträge über {monthly}€/Monat sind sozialabgabenpflichtig",
        "en": "Note: Contributions over {monthly}€/month are subject to social security",
    },
    # Field labels
    "field.currentAge": {"de": "Aktuelles Alter", "en": "Current Age"},
    "field.retirementAge": {"de": "Renteneintrittsalter", "en": "Retirement Age"},
    "field.monthlyContribution": {"de": "Monatlicher Beitrag", "en": "Monthly Contribution"},
    "field.startCapital": {"de": "Startkapital", "en": "Start Capital"},
    "field.expectedReturn": {"de": "Erwartete Rendite", "en": "Expected Return"},
    "field.inflationRate": {"de": "Inflationsrate", "en": "Inflation Rate"},
    # Export columns
    "column.year": {"de": "Jahr", "en": "Year"},
    "column.capital": {"de": "Kapital", "en": "Capital"},
    "column.contributions": {"de": "Einzahlungen", "en": "Contributions"},
    "column.returns": {"de": "Erträge", "en": "Returns"},
    "column.criterion": {"de": "Kriterium", "en": "Criterion"},
    # Share texts
    "share.projection_title": {"de": "Meine Rentenprognose", "en": "My Pension Projection"},
    "share.projection_text": {
        "de": "Meine prognostizierte Rente: €{pension}/Monat bei €{capital} Endkapital",
        "en": "My projected pension: €{pension}/month with €{capital} final capital",
    },
    "share.comparison_title": {"de": "Produktvergleich", "en": "Product Comparison"},
    "share.comparison_text": {
        "de": "Mein Altersvorsorge-Vergleich: {products}",
        "en": "My pension product comparison: {products}",
    },
    # Operation failures
    "error.export": {
        "de": "Ergebnisse konnten nicht heruntergeladen werden",
        "en": "Failed to download results",
    },
}


def _plain(value: object) -> object:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def translate(key: str, language: Language = DEFAULT_LANGUAGE, **values: object) -> str:
    """Render the template ``key`` in ``language``."""
    template = TRANSLATIONS[key][language]
    return template.format(**{name: _plain(value) for name, value in values.items()})


def field_label(field_name: str, language: Language = DEFAULT_LANGUAGE) -> str:
    return translate(f"field.{field_name}", language)
