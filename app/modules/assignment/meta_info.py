# app/modules/assignment/meta_info.py
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from .exceptions import DateRangeTooShortError, InvalidDateRangeError
from .policy import get_policy


@dataclass(frozen=True)
class MetaInfo:
    rating: int
    earnings: int


def calculate_meta_info(vehicle_type, costs: Sequence[int], start: datetime, end: datetime) -> MetaInfo:
    """
    Ganancias y rating de un courier a partir de sus órdenes completadas.

    earnings = coef_costo * suma(costos)
    rating = (cantidad_ordenes // horas) * coef_rating, división entera
    """
    if end <= start:
        raise InvalidDateRangeError("end_date debe ser posterior a start_date")

    duration_hours = int((end - start).total_seconds() // 3600)
    if duration_hours == 0:
        raise DateRangeTooShortError("Rango de fechas demasiado corto (menos de una hora)")

    policy = get_policy(vehicle_type)

    return MetaInfo(
        rating=len(costs) // duration_hours * policy.rating_coefficient,
        earnings=policy.cost_coefficient * sum(costs),
    )
