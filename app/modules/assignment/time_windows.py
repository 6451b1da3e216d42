# app/modules/assignment/time_windows.py
import re
from dataclasses import dataclass
from datetime import datetime

from .exceptions import InvalidTimeRangeError

TIME_RANGE_PATTERN = re.compile(r"^\d{2}:\d{2}-\d{2}:\d{2}$")
TIME_LAYOUT = "%H:%M"


@dataclass(frozen=True)
class TimeRange:
    """Intervalo del mismo día, en minutos desde medianoche"""
    start: int
    end: int

    @property
    def minutes(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start // 60:02d}:{self.start % 60:02d}-{self.end // 60:02d}:{self.end % 60:02d}"


def _parse_clock(value: str, label: str) -> int:
    try:
        parsed = datetime.strptime(value, TIME_LAYOUT)
    except ValueError:
        raise InvalidTimeRangeError(f"Hora de {label} inválida: '{value}'")
    return parsed.hour * 60 + parsed.minute


def parse_time_range(value: str) -> TimeRange:
    """
    Convertir "HH:MM-HH:MM" en TimeRange.

    Rechaza formatos distintos, horas inválidas y rangos cuyo fin
    no sea posterior al inicio.
    """
    if not isinstance(value, str) or not TIME_RANGE_PATTERN.match(value):
        raise InvalidTimeRangeError(f"Formato de rango horario inválido: '{value}'")

    start_str, end_str = value.split("-")
    start = _parse_clock(start_str, "inicio")
    end = _parse_clock(end_str, "fin")

    if end <= start:
        raise InvalidTimeRangeError("La hora de fin debe ser posterior a la hora de inicio")

    return TimeRange(start=start, end=end)


def check_time_overlap(first: TimeRange, second: TimeRange, min_overlap_minutes: int) -> bool:
    """¿La intersección de ambos intervalos dura al menos min_overlap_minutes?"""
    if first.end < first.start or second.end < second.start:
        return False

    overlap_start = max(first.start, second.start)
    overlap_end = min(first.end, second.end)

    if overlap_end < overlap_start:
        return False

    return overlap_end - overlap_start >= min_overlap_minutes
