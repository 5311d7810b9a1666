"""Mini README: Tests for the FastAPI facade.

Each request runs through the real capture machine, history engine and
detail loader backed by an in-memory store.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from qrscan.interface import create_application

JANE = {"X-Owner-Id": "u1", "X-Owner-Email": "jane@example.com"}
SAM = {"X-Owner-Id": "u2", "X-Owner-Email": "sam@example.com"}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_application())


def test_overview_lists_providers_and_types(client: TestClient) -> None:
    payload = client.get("/").json()
    assert "simulated" in payload["camera_providers"]
    assert {entry["type"] for entry in payload["content_types"]} >= {"url", "text"}


def test_classify_endpoint(client: TestClient) -> None:
    payload = client.get("/classify", params={"data": "jane@example.com"}).json()
    assert payload["type"] == "email"
    assert payload["action_target"] == "mailto:jane@example.com"


def test_submit_list_and_fetch_scan(client: TestClient) -> None:
    created = client.post("/scans", data={"data": "https://a.example", "raw_type": "qr"}, headers=JANE)
    assert created.status_code == 201
    body = created.json()
    assert body["state"] == "result_choice"
    assert body["actions"] == ["scan_another", "view_details"]
    assert body["classification"]["type"] == "url"
    record_id = body["record"]["record_id"]

    listing = client.get("/scans", headers=JANE).json()
    assert listing["total"] == 1
    assert listing["scans"][0]["record_id"] == record_id

    assert client.get("/scans", headers=SAM).json()["scans"] == []

    detail = client.get(f"/scans/{record_id}", headers=JANE)
    assert detail.status_code == 200
    assert detail.json()["fields"][0] == {"label": "QR Code Data", "value": "https://a.example"}


def test_foreign_and_missing_scans(client: TestClient) -> None:
    record_id = client.post("/scans", data={"data": "secret"}, headers=JANE).json()["record"]["record_id"]

    denied = client.get(f"/scans/{record_id}", headers=SAM)
    assert denied.status_code == 403
    assert denied.json()["detail"]["navigation"] == ["go_back"]

    assert client.get("/scans/nope", headers=JANE).status_code == 404


def test_empty_payload_is_unprocessable(client: TestClient) -> None:
    response = client.post("/scans", data={"data": ""}, headers=JANE)
    assert response.status_code == 422
    assert response.json()["detail"]["category"] == "validation"


def test_missing_owner_is_unauthorised(client: TestClient) -> None:
    response = client.post("/scans", data={"data": "hello"})
    assert response.status_code == 401
    assert response.json()["detail"]["navigation"] == ["go_to_login"]
    assert client.get("/scans").status_code == 401


def test_listing_supports_sort_and_query(client: TestClient) -> None:
    for payload in ("alpha", "beta", "alphabet"):
        client.post("/scans", data={"data": payload}, headers=JANE)

    ascending = client.get("/scans", params={"sort": "asc", "q": "ALPHA"}, headers=JANE).json()
    assert [row["data"] for row in ascending["scans"]] == ["alpha", "alphabet"]
    assert ascending["total"] == 3

    assert client.get("/scans", params={"sort": "sideways"}, headers=JANE).status_code == 400
