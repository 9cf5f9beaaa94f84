"""
Artist rating value object.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class ArtistRating:
    """Cached mean and count of an artist's published reviews."""

    average: Decimal = Decimal("0.0")
    count: int = 0

    @classmethod
    def from_totals(cls, total: int, count: int) -> "ArtistRating":
        """Aggregate from a database SUM/COUNT pair."""
        if not count:
            return cls()
        mean = Decimal(total) / Decimal(count)
        return cls(
            average=mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP),
            count=count,
        )
