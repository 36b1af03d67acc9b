from __future__ import annotations

from decimal import Decimal

from ninja import Router
from ninja.errors import HttpError

from .schemas import DeliveryQuoteOut, DeliveryRuleIn, DeliveryRuleOut
from .services import (
    DeliveryRuleError,
    compute_fee,
    get_delivery_rules,
    parse_delivery_mode,
    replace_delivery_rules,
    tier_from_values,
)


router = Router(tags=["shipping"])


def _rule_out(r) -> dict:
    return {
        "id": r.id,
        "delivery_mode": r.delivery_mode,
        "min_weight": r.min_weight,
        "max_weight": r.max_weight,
        "price": r.price,
    }


@router.get("/rules", response=list[DeliveryRuleOut])
def delivery_rules(request):
    return [_rule_out(r) for r in get_delivery_rules()]


@router.put("/rules", response=list[DeliveryRuleOut])
def delivery_rules_replace(request, payload: list[DeliveryRuleIn]):
    try:
        tiers = [
            tier_from_values(
                delivery_mode=p.delivery_mode,
                min_weight=p.min_weight,
                max_weight=p.max_weight,
                price=p.price,
            )
            for p in payload
        ]
        rules = replace_delivery_rules(tiers)
    except DeliveryRuleError as exc:
        raise HttpError(400, str(exc))
    return [_rule_out(r) for r in rules]


@router.get("/quote", response=DeliveryQuoteOut)
def delivery_quote(request, weight: Decimal, mode: str = "colissimo"):
    try:
        mode = parse_delivery_mode(mode)
    except ValueError as exc:
        raise HttpError(400, str(exc))
    if weight < 0:
        raise HttpError(400, "weight cannot be negative")

    price = compute_fee(weight=weight, mode=mode, rules=get_delivery_rules())
    return {"delivery_mode": mode, "weight": weight, "price": price}
