"""
dealbook.records.mapping

Request body -> record value mapping.

Responsibilities:
- Hold the fixed field list of every record kind.
- Build a proposed record from a raw JSON body and the authenticated principal.

The mapping is pure and total: each listed field is read from the body by name (absent
fields become `None`), keys outside the list are dropped, and the owner field is always
taken from the principal.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from dealbook.auth.models import Principal

OWNER_FIELD = "user_id"


class RecordKind(enum.StrEnum):
    deal = "deal"
    survey = "survey"


DEAL_FIELDS: tuple[str, ...] = (
    # Business
    "business_name",
    "years_in_business",
    "employee_count",
    "owner_operated",
    # Price
    "asking_price",
    "offer_price",
    "valuation_multiple",
    # Financials
    "annual_revenue",
    "gross_profit",
    "sde",
    "ebitda",
    "growth_rate",
    "buyer_salary",
    "capex_annual",
    "rent_annual",
    # Assets
    "inventory_value",
    "ffe_value",
    "real_estate_included",
    "real_estate_value",
    "working_capital",
    # Financing
    "down_payment_pct",
    "down_payment_amount",
    "sba_loan",
    "sba_loan_amount",
    "sba_interest_rate",
    "sba_term_years",
    "seller_financing",
    "seller_note_amount",
    "seller_note_rate",
    "seller_note_term_years",
    "seller_note_standby",
    "earnout",
    "earnout_amount",
    "closing_costs",
    "dscr_target",
)

SURVEY_FIELDS: tuple[str, ...] = (
    "occupation",
    "acquisition_goal",
    "referral_source",
)

RECORD_FIELDS: dict[RecordKind, tuple[str, ...]] = {
    RecordKind.deal: DEAL_FIELDS,
    RecordKind.survey: SURVEY_FIELDS,
}


def map_record(kind: RecordKind, body: Mapping[str, Any], principal: Principal) -> dict[str, Any]:
    record = {name: body.get(name) for name in RECORD_FIELDS[kind]}
    # Owner is never read from the body.
    record[OWNER_FIELD] = principal.user_id
    return record


# --- Module Notes -----------------------------------------------------------
# Column types live in `dealbook.db.models`; type and range checks are left to the
# store's schema.
