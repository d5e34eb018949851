from __future__ import annotations

import json
import sys

import pytest
from flask.testing import FlaskClient

from pension_calculator.app.api import routes
from pension_calculator.config import AppConfig
from pension_calculator.core.projection import monthly_pension
from pension_calculator.errors import ExportError


def calculation_payload(product: str = "private", language: str = "de", **overrides) -> dict:
    inputs = {
        "currentAge": 35,
        "retirementAge": 67,
        "monthlyContribution": 300,
        "startCapital": 10000,
        "expectedReturn": 6,
        "inflationRate": 2,
    }
    inputs.update(overrides)
    return {"inputs": inputs, "productType": product, "language": language}


def test_health(client: FlaskClient):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json == {"status": "ok"}


def test_limits_table(client: FlaskClient):
    limits = client.get("/api/limits").get_json()

    assert limits["RUERUP_MAX_ANNUAL"] == 27566
    assert limits["RUERUP_MAX_MONTHLY"] == 2297
    assert limits["RIESTER_MIN_ANNUAL"] == 60
    assert limits["OCCUPATIONAL_TAX_FREE_MONTHLY"] == 584
    assert limits["MAX_AGE"] == 75
    assert limits["MIN_RETIREMENT_AGE"] == 55
    assert limits["MAX_MONTHLY_CONTRIBUTION"] == 5000
    assert limits["MAX_START_CAPITAL"] == 1000000


def test_projection_endpoint_returns_series_and_summary(client: FlaskClient):
    resp = client.post("/api/calc/projection", json=calculation_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    points = body["points"]
    assert len(points) == 33
    assert points[0] == {
        "year": 35,
        "capital": 14200,
        "contributions": 10000,
        "returns": 4200,
        "realCapital": 13922,
    }
    assert points[-1]["year"] == 67

    summary = body["summary"]
    assert summary["finalCapital"] == points[-1]["capital"]
    assert summary["monthlyPension"] == monthly_pension(points[-1]["capital"])
    assert body["productType"] == "private"
    assert body["notices"] == []


def test_invalid_inputs_return_first_localized_error(client: FlaskClient):
    resp = client.post("/api/calc/projection", json=calculation_payload(retirementAge=30))

    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "Renteneintrittsalter muss höher als das aktuelle Alter sein"
    assert [error["field"] for error in body["errors"]] == ["retirementAge"]


def test_ruerup_limit_over_http(client: FlaskClient):
    rejected = client.post(
        "/api/calc/projection", json=calculation_payload("ruerup", "en", monthlyContribution=2400)
    )
    accepted = client.post(
        "/api/calc/projection", json=calculation_payload("ruerup", "en", monthlyContribution=2297)
    )

    assert rejected.status_code == 422
    assert rejected.get_json()["error"].startswith("Rürup contribution must be at most")
    assert accepted.status_code == 200


def test_tab_ids_are_accepted_as_product_type(client: FlaskClient):
    resp = client.post("/api/calc/projection", json=calculation_payload("private-pension"))

    assert resp.status_code == 200
    assert resp.get_json()["productType"] == "private"


def test_occupational_notice_blocks_by_default(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection", json=calculation_payload("occupational", monthlyContribution=600)
    )

    assert resp.status_code == 422
    assert resp.get_json()["errors"][0]["advisory"] is True


@pytest.mark.parametrize("app_config", [AppConfig(advisory_blocks=False)])
def test_occupational_notice_can_be_informational(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection", json=calculation_payload("occupational", "en", monthlyContribution=600)
    )

    assert resp.status_code == 200
    notices = resp.get_json()["notices"]
    assert len(notices) == 1
    assert notices[0]["error"] == "Note: Contributions over 584€/month are subject to social security"


def test_inputs_are_sanitized_before_validation(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection",
        json=calculation_payload(startCapital="-5", inflationRate="abc"),
    )

    assert resp.status_code == 200
    first = resp.get_json()["points"][0]
    assert first["contributions"] == 0
    assert first["capital"] == 3600
    assert first["realCapital"] == 3600


def test_non_numeric_age_fails_validation(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection", json=calculation_payload(language="en", currentAge="abc")
    )

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "Current Age must be at least 18"


def test_malformed_payload_returns_400(client: FlaskClient):
    resp = client.post("/api/calc/projection", json={"inputs": {}})

    assert resp.status_code == 400
    assert "detail" in resp.get_json()


def test_unknown_language_returns_400(client: FlaskClient):
    resp = client.post("/api/calc/projection", json=calculation_payload(language="fr"))
    assert resp.status_code == 400


def test_validate_endpoint_lists_every_failure(client: FlaskClient):
    resp = client.post(
        "/api/calc/validate",
        json=calculation_payload(language="en", currentAge=80, retirementAge=70, expectedReturn=20),
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["isValid"] is False
    assert [error["field"] for error in body["errors"]] == [
        "currentAge",
        "retirementAge",
        "expectedReturn",
    ]


def test_validate_endpoint_accepts_valid_inputs(client: FlaskClient):
    resp = client.post("/api/calc/validate", json=calculation_payload("riester", monthlyContribution=5))
    assert resp.get_json() == {"isValid": True, "errors": []}


@pytest.mark.parametrize("app_config", [AppConfig(default_language="en")])
def test_default_language_comes_from_config(client: FlaskClient):
    payload = calculation_payload(retirementAge=30)
    del payload["language"]

    resp = client.post("/api/calc/projection", json=payload)

    assert resp.get_json()["error"] == "Retirement age must be greater than current age"


def test_projection_csv_export(client: FlaskClient):
    resp = client.post("/api/calc/projection/export?format=csv", json=calculation_payload())

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    disposition = resp.headers["Content-Disposition"]
    assert "rentenrechner-ergebnisse-" in disposition
    assert disposition.endswith('.csv"')

    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Jahr,Kapital,Einzahlungen,Erträge"
    assert lines[1] == "35,14200,10000,4200"
    assert len(lines) == 34


def test_projection_json_export(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection/export?format=json", json=calculation_payload(language="en")
    )

    assert resp.status_code == 200
    rows = json.loads(resp.data)
    assert rows[0] == {"Year": 35, "Capital": 14200, "Contributions": 10000, "Returns": 4200}


def test_unsupported_export_format(client: FlaskClient):
    resp = client.post("/api/calc/projection/export?format=png", json=calculation_payload())

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Unsupported format: png"


def test_export_of_invalid_inputs_is_rejected(client: FlaskClient):
    resp = client.post(
        "/api/calc/projection/export", json=calculation_payload(retirementAge=30)
    )
    assert resp.status_code == 422


def test_share_projection(client: FlaskClient):
    payload = calculation_payload(language="en")
    payload["url"] = "https://example.org/calc"

    body = client.post("/api/calc/share", json=payload).get_json()

    assert body["title"] == "My Pension Projection"
    assert body["text"].startswith("My projected pension: €")
    assert body["url"] == "https://example.org/calc"


@pytest.mark.parametrize("app_config", [AppConfig(share_base_url="https://example.org/rechner")])
def test_share_builds_link_from_config(client: FlaskClient):
    body = client.post("/api/calc/share", json=calculation_payload("riester")).get_json()
    assert body["url"] == "https://example.org/rechner?product=riester"


def test_comparison_defaults(client: FlaskClient):
    resp = client.post("/api/comparison", json={})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["selectedProducts"] == ["riester", "ruerup", "private"]
    assert [product["name"] for product in body["products"]] == [
        "Riester-Rente",
        "Rürup-Rente",
        "Private Rente",
    ]
    assert len(body["radar"]) == 5
    assert body["radar"][-1]["values"] == {"riester": 4, "ruerup": 3, "private": 5}
    assert body["comparison"][2] == {
        "id": "private",
        "name": "Private Rente",
        "contribution": 250.0,
        "expectedReturn": 7.5,
    }


@pytest.mark.parametrize(
    "selection",
    [[], ["riester", "riester"], ["riester", "ruerup", "private", "occupational", "private"], ["basic"]],
)
def test_comparison_rejects_bad_selection(client: FlaskClient, selection):
    resp = client.post("/api/comparison", json={"selectedProducts": selection})
    assert resp.status_code == 400


def test_comparison_csv_export(client: FlaskClient):
    resp = client.post(
        "/api/comparison/export",
        json={"selectedProducts": ["occupational", "riester"], "language": "en"},
    )

    assert resp.status_code == 200
    assert "produktvergleich-daten-" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Criterion,Occupational Pension,Riester Pension"
    assert lines[1] == "Expected Return,5.8,4.5"


def test_comparison_share(client: FlaskClient):
    body = client.post(
        "/api/comparison/share", json={"selectedProducts": ["riester", "ruerup"]}
    ).get_json()

    assert body["title"] == "Produktvergleich"
    assert body["text"] == "Mein Altersvorsorge-Vergleich: Riester-Rente, Rürup-Rente"


def test_comparison_rejects_malformed_json(client: FlaskClient):
    resp = client.post("/api/comparison", data="{not json", content_type="application/json")
    assert resp.status_code == 400


def test_huge_riester_contribution_is_projected(client: FlaskClient):
    payload = calculation_payload(
        "riester",
        currentAge=20,
        retirementAge=75,
        monthlyContribution=1e306,
        startCapital=0,
        expectedReturn=15,
        inflationRate=0,
    )

    resp = client.post("/api/calc/projection", json=payload)

    assert resp.status_code == 200
    points = resp.get_json()["points"]
    assert len(points) == 56
    assert points[-1]["capital"] == int(sys.float_info.max)


def test_infinite_contribution_is_sanitized_to_zero(client: FlaskClient):
    body = (
        '{"productType": "riester", "language": "en", "inputs": {"currentAge": 35, '
        '"retirementAge": 67, "monthlyContribution": Infinity, "startCapital": 0, '
        '"expectedReturn": 6, "inflationRate": 2}}'
    )

    resp = client.post("/api/calc/projection", data=body, content_type="application/json")

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "Riester contribution must be at least 60€/year"


def test_export_failure_returns_localized_error(client: FlaskClient, monkeypatch: pytest.MonkeyPatch):
    def failing_csv(rows, headers=None):
        raise ExportError("disk full")

    monkeypatch.setattr(routes, "rows_to_csv", failing_csv)

    resp = client.post("/api/calc/projection/export?format=csv", json=calculation_payload())

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Ergebnisse konnten nicht heruntergeladen werden"}
    assert client.post("/api/calc/projection", json=calculation_payload()).status_code == 200
