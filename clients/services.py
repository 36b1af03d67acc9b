from __future__ import annotations

import logging

from django.db.models import Q

from .models import Client


logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("email", "phone", "address", "city", "postal_code", "notes")


class ClientValidationError(ValueError):
    pass


def clean_client(data: dict, *, partial: bool = False) -> dict:
    out: dict[str, str] = {}
    if not partial or "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise ClientValidationError("Client name is required")
        out["name"] = name
    for field in CONTACT_FIELDS:
        if not partial or field in data:
            out[field] = (data.get(field) or "").strip()
    return out


def create_client(data: dict) -> Client:
    client = Client.objects.create(**clean_client(data))
    logger.info("Client created", extra={"client_id": client.id})
    return client


def get_client(client_id: int) -> Client:
    client = Client.objects.filter(id=int(client_id)).first()
    if not client:
        raise LookupError("Client not found")
    return client


def update_client(client_id: int, data: dict) -> Client:
    client = get_client(client_id)
    cleaned = clean_client(data, partial=True)
    for field, value in cleaned.items():
        setattr(client, field, value)
    if cleaned:
        client.save(update_fields=[*cleaned.keys(), "updated_at"])
    logger.info("Client updated", extra={"client_id": client.id})
    return client


def delete_client(client_id: int) -> None:
    # Past orders keep their own copy of the client, so deleting is always safe.
    deleted, _ = Client.objects.filter(id=int(client_id)).delete()
    if not deleted:
        raise LookupError("Client not found")
    logger.info("Client deleted", extra={"client_id": int(client_id)})


def search_clients(q: str | None = None):
    qs = Client.objects.all().order_by("name", "id")
    q = (q or "").strip()
    if q:
        qs = qs.filter(
            Q(name__icontains=q)
            | Q(email__icontains=q)
            | Q(phone__contains=q)
            | Q(city__icontains=q)
        )
    return qs
