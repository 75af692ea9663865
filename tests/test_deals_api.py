"""
tests.test_deals_api

Deal routes end to end against a SQLite file: persistence, owner scoping, 400/403/404/500.
"""

from __future__ import annotations

import uuid

import httpx
import pytest
from conftest import ALICE_TOKEN, BOB_TOKEN, bearer
from sqlalchemy.exc import OperationalError

from dealbook.db.repositories.records import RecordRepo
from dealbook.records.mapping import DEAL_FIELDS

DEAL_FORM = {
    "business_name": "Harbor Street Laundromat",
    "years_in_business": 12,
    "employee_count": 4,
    "owner_operated": True,
    "asking_price": 650000.0,
    "offer_price": 600000.0,
    "valuation_multiple": 3.1,
    "annual_revenue": 420000.0,
    "gross_profit": 300000.0,
    "sde": 195000.0,
    "ebitda": 140000.0,
    "growth_rate": 0.03,
    "buyer_salary": 60000.0,
    "capex_annual": 15000.0,
    "rent_annual": 48000.0,
    "inventory_value": 5000.0,
    "ffe_value": 220000.0,
    "real_estate_included": False,
    "real_estate_value": 0.0,
    "working_capital": 25000.0,
    "down_payment_pct": 0.1,
    "down_payment_amount": 60000.0,
    "sba_loan": True,
    "sba_loan_amount": 480000.0,
    "sba_interest_rate": 0.1075,
    "sba_term_years": 10,
    "seller_financing": True,
    "seller_note_amount": 60000.0,
    "seller_note_rate": 0.06,
    "seller_note_term_years": 5,
    "seller_note_standby": True,
    "earnout": False,
    "earnout_amount": 0.0,
    "closing_costs": 18000.0,
    "dscr_target": 1.25,
}


async def _save(client: httpx.AsyncClient, token: str, body: dict) -> dict:
    r = await client.post("/save", json=body, headers=bearer(token))
    assert r.status_code == 201, r.text
    return r.json()


def test_form_covers_every_deal_field() -> None:
    assert set(DEAL_FORM) == set(DEAL_FIELDS)


@pytest.mark.asyncio
async def test_save_returns_created_deal(client: httpx.AsyncClient) -> None:
    body = await _save(client, ALICE_TOKEN, DEAL_FORM)

    assert body["message"] == "Deal saved successfully!"
    deal = body["deal"]
    assert deal["user_id"] == "user-alice"
    uuid.UUID(deal["deal_id"])
    assert deal["business_name"] == "Harbor Street Laundromat"


@pytest.mark.asyncio
async def test_forged_owner_is_ignored(client: httpx.AsyncClient) -> None:
    body = await _save(client, ALICE_TOKEN, {**DEAL_FORM, "user_id": "user-bob"})
    assert body["deal"]["user_id"] == "user-alice"

    r = await client.get("/get-deals", headers=bearer(BOB_TOKEN))
    assert r.json() == {"deals": []}


@pytest.mark.asyncio
async def test_save_then_fetch_round_trips_fields(client: httpx.AsyncClient) -> None:
    saved = (await _save(client, ALICE_TOKEN, DEAL_FORM))["deal"]

    r = await client.get(f"/get-deal/{saved['deal_id']}", headers=bearer(ALICE_TOKEN))
    assert r.status_code == 200
    fetched = r.json()["deal"]
    assert {name: fetched[name] for name in DEAL_FORM} == DEAL_FORM
    assert fetched["deal_id"] == saved["deal_id"]
    assert fetched["user_id"] == "user-alice"


@pytest.mark.asyncio
async def test_partial_form_stores_absent_fields_as_null(client: httpx.AsyncClient) -> None:
    deal = (await _save(client, ALICE_TOKEN, {"business_name": "Tiny Cafe"}))["deal"]
    assert deal["business_name"] == "Tiny Cafe"
    assert deal["asking_price"] is None
    assert deal["sba_loan"] is None


@pytest.mark.asyncio
async def test_empty_body_saves_blank_deal(client: httpx.AsyncClient) -> None:
    r = await client.post("/save", headers=bearer(ALICE_TOKEN))
    assert r.status_code == 201
    assert r.json()["deal"]["business_name"] is None


@pytest.mark.asyncio
async def test_non_object_body_is_400(client: httpx.AsyncClient) -> None:
    r = await client.post("/save", json=[1, 2, 3], headers=bearer(ALICE_TOKEN))
    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"{not json", b"\xff\xfe", b"\"a string\""])
async def test_undecodable_body_is_400_for_authenticated_caller(
    client: httpx.AsyncClient, content: bytes
) -> None:
    r = await client.post(
        "/save",
        content=content,
        headers={**bearer(ALICE_TOKEN), "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Request body must be a JSON object."}


@pytest.mark.asyncio
async def test_null_body_saves_blank_deal(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/save",
        content=b"null",
        headers={**bearer(ALICE_TOKEN), "Content-Type": "application/json"},
    )
    assert r.status_code == 201
    assert r.json()["deal"]["asking_price"] is None


@pytest.mark.asyncio
async def test_get_deals_returns_only_callers_projection(client: httpx.AsyncClient) -> None:
    await _save(client, ALICE_TOKEN, {**DEAL_FORM, "business_name": "Alice One"})
    await _save(client, ALICE_TOKEN, {**DEAL_FORM, "business_name": "Alice Two"})
    await _save(client, BOB_TOKEN, {**DEAL_FORM, "business_name": "Bob Only"})

    r = await client.get("/get-deals", headers=bearer(ALICE_TOKEN))
    assert r.status_code == 200
    deals = r.json()["deals"]
    assert sorted(d["business_name"] for d in deals) == ["Alice One", "Alice Two"]
    assert all(set(d) == {"deal_id", "business_name"} for d in deals)

    r = await client.get("/get-deals", headers=bearer(BOB_TOKEN))
    assert [d["business_name"] for d in r.json()["deals"]] == ["Bob Only"]


@pytest.mark.asyncio
async def test_foreign_deal_is_403(client: httpx.AsyncClient) -> None:
    deal = (await _save(client, ALICE_TOKEN, DEAL_FORM))["deal"]

    r = await client.get(f"/get-deal/{deal['deal_id']}", headers=bearer(BOB_TOKEN))
    assert r.status_code == 403
    assert r.json() == {"error": "You do not have access to this deal."}


@pytest.mark.asyncio
async def test_unknown_deal_is_404(client: httpx.AsyncClient) -> None:
    r = await client.get(f"/get-deal/{uuid.uuid4()}", headers=bearer(ALICE_TOKEN))
    assert r.status_code == 404
    assert r.json() == {"error": "Deal not found."}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/get-deal", "/get-deal/", "/get-deal/not-a-uuid"])
async def test_bad_deal_id_is_400(client: httpx.AsyncClient, path: str) -> None:
    r = await client.get(path, headers=bearer(ALICE_TOKEN))
    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.asyncio
async def test_store_failure_is_500(client: httpx.AsyncClient, monkeypatch) -> None:
    async def broken_create(self, kind, record):
        raise OperationalError("INSERT INTO deals", {}, Exception("database is locked"))

    monkeypatch.setattr(RecordRepo, "create", broken_create)

    r = await client.post("/save", json=DEAL_FORM, headers=bearer(ALICE_TOKEN))
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to save deal."}
