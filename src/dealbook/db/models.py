"""
dealbook.db.models

Persistence schema.

Responsibilities:
- Define ORM models for the persisted record kinds:
  - Deal: business acquisition valuation inputs
  - Survey: onboarding survey answers
- Map each `RecordKind` to its model.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Float, Index, Integer, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from dealbook.db.base import Base
from dealbook.records.mapping import RecordKind


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no timezone-aware storage.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class Deal(Base):
    __tablename__ = "deals"

    deal_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(256), nullable=False)

    business_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    years_in_business: Mapped[int | None] = mapped_column(Integer, nullable=True)
    employee_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    owner_operated: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    asking_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    offer_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    valuation_multiple: Mapped[float | None] = mapped_column(Float, nullable=True)

    annual_revenue: Mapped[float | None] = mapped_column(Float, nullable=True)
    gross_profit: Mapped[float | None] = mapped_column(Float, nullable=True)
    sde: Mapped[float | None] = mapped_column(Float, nullable=True)
    ebitda: Mapped[float | None] = mapped_column(Float, nullable=True)
    growth_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    buyer_salary: Mapped[float | None] = mapped_column(Float, nullable=True)
    capex_annual: Mapped[float | None] = mapped_column(Float, nullable=True)
    rent_annual: Mapped[float | None] = mapped_column(Float, nullable=True)

    inventory_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    ffe_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    real_estate_included: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    real_estate_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    working_capital: Mapped[float | None] = mapped_column(Float, nullable=True)

    down_payment_pct: Mapped[float | None] = mapped_column(Float, nullable=True)
    down_payment_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    sba_loan: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    sba_loan_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    sba_interest_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    sba_term_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    seller_financing: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    seller_note_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    seller_note_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    seller_note_term_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    seller_note_standby: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    earnout: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    earnout_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    closing_costs: Mapped[float | None] = mapped_column(Float, nullable=True)
    dscr_target: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_deals_user_created", "user_id", "created_at"),)


class Survey(Base):
    __tablename__ = "surveys"

    survey_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(String(256), nullable=False, index=True)

    occupation: Mapped[str | None] = mapped_column(Text, nullable=True)
    acquisition_goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    referral_source: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


MODELS: dict[RecordKind, type[Deal] | type[Survey]] = {
    RecordKind.deal: Deal,
    RecordKind.survey: Survey,
}


# --- Module Notes -----------------------------------------------------------
# Column names match `records.mapping` field names one-to-one; a new record kind needs a
# field list there and a model here.
