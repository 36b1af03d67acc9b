from __future__ import annotations

from ninja import Router
from ninja.errors import HttpError

from .models import Client
from .schemas import ClientIn, ClientOut, ClientUpdateIn
from .services import (
    ClientValidationError,
    create_client,
    delete_client,
    get_client,
    search_clients,
    update_client,
)

router = Router(tags=["clients"])


def _client_out(c: Client) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "email": c.email or "",
        "phone": c.phone or "",
        "address": c.address or "",
        "city": c.city or "",
        "postal_code": c.postal_code or "",
        "notes": c.notes or "",
        "created_at": c.created_at.isoformat(),
        "updated_at": c.updated_at.isoformat(),
    }


@router.get("", response=list[ClientOut])
def clients(request, q: str | None = None):
    return [_client_out(c) for c in search_clients(q)]


@router.post("", response={201: ClientOut})
def client_create(request, payload: ClientIn):
    try:
        client = create_client(payload.model_dump())
    except ClientValidationError as exc:
        raise HttpError(400, str(exc))
    return 201, _client_out(client)


@router.get("/{client_id}", response=ClientOut)
def client_detail(request, client_id: int):
    try:
        return _client_out(get_client(client_id))
    except LookupError:
        raise HttpError(404, "Client not found")


@router.put("/{client_id}", response=ClientOut)
def client_update(request, client_id: int, payload: ClientUpdateIn):
    try:
        client = update_client(client_id, payload.model_dump(exclude_unset=True))
    except LookupError:
        raise HttpError(404, "Client not found")
    except ClientValidationError as exc:
        raise HttpError(400, str(exc))
    return _client_out(client)


@router.delete("/{client_id}", response={204: None})
def client_delete(request, client_id: int):
    try:
        delete_client(client_id)
    except LookupError:
        raise HttpError(404, "Client not found")
    return 204, None
