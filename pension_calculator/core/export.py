"""Tabular export, share texts and number formatting for de/en.

``format_currency`` and ``format_percent`` are library helpers for Python
callers; the endpoints only use ``format_number`` through the share texts.
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlencode

import pandas as pd

from pension_calculator.core.comparison import product_catalog, radar_rows
from pension_calculator.core.messages import DEFAULT_LANGUAGE, Language, translate
from pension_calculator.errors import ExportError
from pension_calculator.schemas.calculator import (
    PensionSummary,
    ProductType,
    ProjectionPoint,
    SharePayload,
)

PROJECTION_EXPORT_STEM = "rentenrechner-ergebnisse"
COMPARISON_EXPORT_STEM = "produktvergleich-daten"


def rows_to_csv(rows: Sequence[Mapping[str, Any]], headers: Optional[Sequence[str]] = None) -> str:
    """Render rows as CSV; the header row defaults to the keys of the first row."""
    if not rows:
        raise ExportError("No data to download")
    columns = list(headers) if headers else list(rows[0].keys())
    # object dtype keeps 9 as "9" instead of upcasting the column to 9.0
    frame = pd.DataFrame(list(rows), columns=columns, dtype=object)
    return frame.to_csv(index=False, lineterminator="\n")


def rows_to_json(data: Any) -> str:
    if data is None:
        raise ExportError("No data to download")
    return json.dumps(data, indent=2, ensure_ascii=False)


def dated_filename(stem: str, extension: str, today: Optional[date] = None) -> str:
    """``rentenrechner-2024-05-01.csv`` style file name."""
    today = today or date.today()
    return f"{stem}-{today.isoformat()}.{extension}"


def projection_export_rows(
    points: Sequence[ProjectionPoint], language: Language = DEFAULT_LANGUAGE
) -> List[Dict[str, int]]:
    year, capital, contributions, returns = (
        translate(f"column.{key}", language) for key in ("year", "capital", "contributions", "returns")
    )
    return [
        {
            year: point.year,
            capital: point.capital,
            contributions: point.contributions,
            returns: point.returns,
        }
        for point in points
    ]


def comparison_export_rows(
    selected: Sequence[ProductType], language: Language = DEFAULT_LANGUAGE
) -> List[Dict[str, Any]]:
    catalog = product_catalog(language)
    criterion = translate("column.criterion", language)
    rows: List[Dict[str, Any]] = []
    for row in radar_rows(selected, language):
        entry: Dict[str, Any] = {criterion: row.metric}
        for product_id in selected:
            entry[catalog[product_id].name] = row.values.get(product_id, 0)
        rows.append(entry)
    return rows


def format_number(value: float, language: Language = DEFAULT_LANGUAGE, decimals: int = 0) -> str:
    """Group thousands the German (1.234,5) or English (1,234.5) way."""
    text = f"{value:,.{decimals}f}"
    if language == "de":
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return text


def format_currency(value: float, language: Language = DEFAULT_LANGUAGE) -> str:
    amount = format_number(value, language)
    if language == "de":
        return f"{amount} €"
    return f"€{amount}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def share_payload(
    summary: PensionSummary, language: Language = DEFAULT_LANGUAGE, url: Optional[str] = None
) -> SharePayload:
    return SharePayload(
        title=translate("share.projection_title", language),
        text=translate(
            "share.projection_text",
            language,
            pension=format_number(summary.monthlyPension, language),
            capital=format_number(summary.finalCapital, language),
        ),
        url=url,
    )


def comparison_share_payload(
    selected: Sequence[ProductType], language: Language = DEFAULT_LANGUAGE, url: Optional[str] = None
) -> SharePayload:
    catalog = product_catalog(language)
    names = ", ".join(catalog[product_id].name for product_id in selected)
    return SharePayload(
        title=translate("share.comparison_title", language),
        text=translate("share.comparison_text", language, products=names),
        url=url,
    )


def _query_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def shareable_link(base_url: str, params: Mapping[str, Any]) -> str:
    """Append the non-null ``params`` as a query string."""
    query = urlencode([(key, _query_value(value)) for key, value in params.items() if value is not None])
    return f"{base_url}?{query}"
