"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, Response, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError

from pension_calculator.config import CONFIG_KEY, AppConfig
from pension_calculator.core.comparison import comparison_rows, product_catalog, radar_rows
from pension_calculator.core.export import (
    COMPARISON_EXPORT_STEM,
    PROJECTION_EXPORT_STEM,
    comparison_export_rows,
    comparison_share_payload,
    dated_filename,
    projection_export_rows,
    rows_to_csv,
    rows_to_json,
    share_payload,
    shareable_link,
)
from pension_calculator.core.limits import limits_as_dict
from pension_calculator.core.messages import Language, translate
from pension_calculator.core.projection import project_pension, summarize_projection
from pension_calculator.core.validation import (
    blocking_failures,
    sanitize_number_input,
    validate_calculator_inputs,
)
from pension_calculator.errors import ExportError, InputValidationError
from pension_calculator.schemas.calculator import (
    CalculationRequest,
    CalculatorInputs,
    ProjectionResponse,
    ShareRequest,
    ValidationResponse,
)
from pension_calculator.schemas.comparison import ComparisonRequest, ComparisonResponse

api_bp = Blueprint("api", __name__)

EXPORT_FORMATS = {"csv": "text/csv; charset=utf-8", "json": "application/json"}


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(InputValidationError)
def _handle_input_error(exc: InputValidationError):
    """Blocking rule failures; ``error`` is the message shown to the user first."""
    return (
        jsonify(
            {
                "error": exc.first_error,
                "errors": [failure.model_dump() for failure in exc.failures],
            }
        ),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


def _config() -> AppConfig:
    return current_app.config[CONFIG_KEY]


def _language(requested: Optional[Language]) -> Language:
    return requested or _config().default_language


def _sanitized(raw_payload: Any) -> Any:
    """Apply the input-field sanitizing (non-numeric -> 0, negatives -> 0)."""
    if not isinstance(raw_payload, dict) or not isinstance(raw_payload.get("inputs"), dict):
        return raw_payload
    inputs = {
        key: sanitize_number_input(value) if key in CalculatorInputs.model_fields else value
        for key, value in raw_payload["inputs"].items()
    }
    return {**raw_payload, "inputs": inputs}


def _calculate(payload: CalculationRequest) -> ProjectionResponse:
    language = _language(payload.language)
    failures = validate_calculator_inputs(payload.inputs, payload.productType, language)
    blocking = blocking_failures(failures, _config().advisory_blocks)
    if blocking:
        logger.warning(
            f"Rejected {payload.productType.value} inputs: {[failure.field for failure in blocking]}"
        )
        raise InputValidationError(blocking)

    points = project_pension(payload.inputs)
    summary = summarize_projection(points)
    logger.info(
        f"Projected {payload.productType.value} pension over {summary.yearsToRetirement} years: "
        f"final capital {summary.finalCapital}, monthly pension {summary.monthlyPension}"
    )
    return ProjectionResponse(
        productType=payload.productType,
        points=points,
        summary=summary,
        notices=[failure for failure in failures if failure.advisory],
    )


def _attachment(
    rows: List[Dict[str, Any]], export_format: str, stem: str, language: Language
) -> Tuple[Any, int]:
    if export_format not in EXPORT_FORMATS:
        return jsonify({"error": f"Unsupported format: {export_format}"}), HTTPStatus.BAD_REQUEST
    try:
        if export_format == "csv":
            body = rows_to_csv(rows).encode("utf-8-sig")
        else:
            body = rows_to_json(rows).encode("utf-8")
    except ExportError as exc:
        logger.error(f"Export of '{stem}' failed: {exc}")
        return jsonify({"error": translate("error.export", language)}), HTTPStatus.INTERNAL_SERVER_ERROR

    filename = dated_filename(stem, export_format)
    response = Response(body, mimetype=EXPORT_FORMATS[export_format])
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response, HTTPStatus.OK


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify({"status": "ok"})


@api_bp.get("/limits")
def limits() -> Any:
    return jsonify(limits_as_dict())


@api_bp.post("/calc/validate")
def validate() -> Any:
    """Run every rule; always 200 so forms can show all messages."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculationRequest.model_validate(_sanitized(raw_payload))
    failures = validate_calculator_inputs(
        payload.inputs, payload.productType, _language(payload.language)
    )
    response = ValidationResponse(
        isValid=not blocking_failures(failures, _config().advisory_blocks),
        errors=failures,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Validate the inputs, then return the year-by-year projection and summary."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculationRequest.model_validate(_sanitized(raw_payload))
    return jsonify(_calculate(payload).model_dump(mode="json"))


@api_bp.post("/calc/projection/export")
def projection_export() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = CalculationRequest.model_validate(_sanitized(raw_payload))
    language = _language(payload.language)
    result = _calculate(payload)
    rows = projection_export_rows(result.points, language)
    return _attachment(rows, request.args.get("format", "csv"), PROJECTION_EXPORT_STEM, language)


@api_bp.post("/calc/share")
def share() -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ShareRequest.model_validate(_sanitized(raw_payload))
    language = _language(payload.language)
    result = _calculate(payload)

    url = payload.url
    base_url = _config().share_base_url
    if url is None and base_url:
        url = shareable_link(base_url, {"product": payload.productType})
    return jsonify(share_payload(result.summary, language, url).model_dump(mode="json"))


def _comparison_request() -> ComparisonRequest:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    return ComparisonRequest.model_validate(raw_payload)


@api_bp.post("/comparison")
def comparison() -> Any:
    payload = _comparison_request()
    language = _language(payload.language)
    catalog = product_catalog(language)
    selected = payload.selectedProducts
    response = ComparisonResponse(
        selectedProducts=selected,
        products=[catalog[product_id] for product_id in selected],
        radar=radar_rows(selected, language),
        comparison=comparison_rows(selected, language),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/comparison/export")
def comparison_export() -> Any:
    payload = _comparison_request()
    language = _language(payload.language)
    rows = comparison_export_rows(payload.selectedProducts, language)
    return _attachment(rows, request.args.get("format", "csv"), COMPARISON_EXPORT_STEM, language)


@api_bp.post("/comparison/share")
def comparison_share() -> Any:
    payload = _comparison_request()
    language = _language(payload.language)
    url = payload.url or _config().share_base_url
    shared = comparison_share_payload(payload.selectedProducts, language, url)
    return jsonify(shared.model_dump(mode="json"))
