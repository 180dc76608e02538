"""
Pricing Service
Subtotal, tax, service fee and total for stadium orders.

Every step is quantized to cents so float drift never accumulates.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Tuple

from app.core.config import settings
from app.core.exceptions import ValidationFailure

CENTS = Decimal("0.01")


def to_money(amount) -> Decimal:
    """Coerce to Decimal and round half-up to 2 places."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    tax: Decimal
    service_fee: Decimal
    tip: Decimal
    total: Decimal

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "service_fee": self.service_fee,
            "tip": self.tip,
            "total": self.total,
        }


class PricingService:
    """Checkout arithmetic."""

    def __init__(self, tax_rate: Decimal = None, service_fee: Decimal = None):
        self.tax_rate = Decimal(str(tax_rate)) if tax_rate is not None else settings.tax_rate
        self.service_fee = to_money(service_fee if service_fee is not None else settings.service_fee)

    def calculate_subtotal(self, lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
        """Sum of ``price * quantity`` over ``(price, quantity)`` pairs."""
        total = Decimal("0")
        for price, quantity in lines:
            total += to_money(price) * quantity
        return to_money(total)

    def calculate_tax(self, subtotal: Decimal) -> Decimal:
        return to_money(to_money(subtotal) * self.tax_rate)

    def calculate_total(self, subtotal: Decimal, tip: Decimal = Decimal("0")) -> Decimal:
        return self.breakdown(subtotal, tip).total

    def breakdown(self, subtotal: Decimal, tip: Decimal = Decimal("0")) -> PriceBreakdown:
        subtotal = to_money(subtotal)
        tip = to_money(tip)
        tax = self.calculate_tax(subtotal)
        total = to_money(subtotal + tax + self.service_fee + tip)
        return PriceBreakdown(
            subtotal=subtotal,
            tax=tax,
            service_fee=self.service_fee,
            tip=tip,
            total=total,
        )

    def verify(
        self,
        lines: Iterable[Tuple[Decimal, int]],
        tip: Decimal,
        subtotal: Decimal,
        tax: Decimal,
        service_fee: Decimal,
        total: Decimal,
    ) -> PriceBreakdown:
        """Recompute the checkout totals and reject any the client got wrong.

        Raises:
            ValidationFailure: naming each mismatched field.
        """
        expected = self.breakdown(self.calculate_subtotal(lines), tip)
        submitted = {
            "subtotal": to_money(subtotal),
            "tax": to_money(tax),
            "service_fee": to_money(service_fee),
            "total": to_money(total),
        }
        mismatches = [
            f"{name} {value} != {getattr(expected, name)}"
            for name, value in submitted.items()
            if value != getattr(expected, name)
        ]
        if mismatches:
            raise ValidationFailure("Order totals do not match: " + "; ".join(mismatches))
        return expected


pricing = PricingService()
