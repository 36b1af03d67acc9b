from __future__ import annotations

from decimal import Decimal

from ninja import Schema


class VatSettingsOut(Schema):
    enabled: bool
    rate: Decimal
    effective_rate: Decimal


class VatSettingsIn(Schema):
    enabled: bool | None = None
    rate: Decimal | None = None
