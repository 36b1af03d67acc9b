from __future__ import annotations

from ninja import Schema


class ClientIn(Schema):
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""


class ClientUpdateIn(Schema):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    notes: str | None = None


class ClientOut(Schema):
    id: int
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""
    created_at: str
    updated_at: str
