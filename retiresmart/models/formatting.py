"""
Currency formatting for display.

Amounts are shown in Indian notation: thousands (k), lakhs (L, 10^5) and
crores (Cr, 10^7), with full figures grouped 12,34,567.
"""

from pydantic import BaseModel, Field

LAKH = 100_000
CRORE = 10_000_000


def group_indian(amount: int) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)."""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])
    return ("-" if amount < 0 else "") + digits


class CurrencyFormatter(BaseModel):
    """Formats currency amounts for display."""

    currency_symbol: str = Field(default="₹", description="Currency symbol")

    def format_compact(self, amount: float) -> str:
        """
        Format an amount compactly, e.g. ``₹ 2.00 Cr`` or ``-₹ 45.2 k``.

        Args:
            amount: The amount to format

        Returns:
            Compact currency string
        """
        if amount == 0:
            return f"{self.currency_symbol} 0"

        magnitude = abs(amount)
        if magnitude >= CRORE:
            value = f"{magnitude / CRORE:.2f} Cr"
        elif magnitude >= LAKH:
            value = f"{magnitude / LAKH:.2f} L"
        elif magnitude >= 1000:
            value = f"{magnitude / 1000:.1f} k"
        else:
            value = group_indian(round(magnitude))

        sign = "-" if amount < 0 else ""
        return f"{sign}{self.currency_symbol} {value}"

    def format_full(self, amount: float) -> str:
        """Format an amount rounded to whole units with Indian digit grouping."""
        sign = "-" if amount < 0 else ""
        return f"{sign}{self.currency_symbol} {group_indian(abs(round(amount)))}"
