"""
Cart and order price breakdowns.

Both carts and orders price their lines the same way: flat shipping fee
unless the subtotal clears the free-shipping threshold, a flat tax rate on
the subtotal, and an optional discount taken off the total.

This module reads no configuration so the storefront client can price a
guest cart without the server's settings; the server passes its own
`PricingRules` built from the environment.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class PricingRules:
    free_shipping_threshold: float = 35.0
    shipping_fee: float = 5.99
    tax_rate: float = 0.08


DEFAULT_RULES = PricingRules()


def round_money(value: float) -> float:
    """Rounds half-up to cents (2.675 -> 2.68, unlike the builtin round)."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def shipping_for(subtotal: float, has_items: bool = True, rules: PricingRules = DEFAULT_RULES) -> float:
    if not has_items or subtotal > rules.free_shipping_threshold:
        return 0.0
    return rules.shipping_fee


def calculate_totals(lines, discount: float = 0.0, rules: PricingRules = DEFAULT_RULES) -> dict:
    """
    Prices an iterable of lines exposing `price` and `quantity`.

    Components are rounded individually; the total is computed from the
    unrounded components and rounded once.
    """
    lines = list(lines)
    subtotal = sum(line.price * line.quantity for line in lines)
    item_count = sum(line.quantity for line in lines)
    shipping = shipping_for(subtotal, has_items=bool(lines), rules=rules)
    tax = subtotal * rules.tax_rate
    total = max(subtotal + shipping + tax - discount, 0.0)

    return {
        "subtotal": round_money(subtotal),
        "item_count": item_count,
        "shipping": round_money(shipping),
        "tax": round_money(tax),
        "discount": round_money(discount),
        "total": round_money(total),
    }
