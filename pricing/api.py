from __future__ import annotations

from ninja import Router
from ninja.errors import HttpError

from .schemas import VatSettingsIn, VatSettingsOut
from .services import effective_vat_rate, get_vat_settings, update_vat_settings

router = Router(tags=["pricing"])


def _vat_out(vs) -> dict:
    return {
        "enabled": vs.enabled,
        "rate": vs.rate,
        "effective_rate": effective_vat_rate(enabled=vs.enabled, rate=vs.rate),
    }


@router.get("/vat", response=VatSettingsOut)
def vat_settings(request):
    return _vat_out(get_vat_settings())


@router.put("/vat", response=VatSettingsOut)
def vat_settings_update(request, payload: VatSettingsIn):
    try:
        vs = update_vat_settings(enabled=payload.enabled, rate=payload.rate)
    except ValueError as exc:
        raise HttpError(400, str(exc))
    return _vat_out(vs)
