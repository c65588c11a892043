"""Session cost computation."""

from collections.abc import Iterable
from decimal import Decimal


def session_cost(
    hourly_rate: Decimal, rental_prices: Iterable[Decimal], duration_hours: int
) -> Decimal:
    """Return staff time plus equipment rental for the booked hours."""
    hours = Decimal(duration_hours)
    equipment_cost = sum(
        (Decimal(price) * hours for price in rental_prices), Decimal(0)
    )
    return Decimal(hourly_rate) * hours + equipment_cost
