# app/shared/schemas/assignments.py
"""Schemas compartidos entre couriers y orders para órdenes y asignaciones"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime, date
from uuid import UUID

from app.modules.assignment.exceptions import InvalidTimeRangeError
from app.modules.assignment.time_windows import parse_time_range
from app.shared.schemas.common import BaseResponse


def validate_time_ranges(values: List[str], label: str) -> List[str]:
    """Validar una lista de rangos "HH:MM-HH:MM" (usado por los field_validator)"""
    for value in values:
        try:
            parse_time_range(value)
        except InvalidTimeRangeError as e:
            raise ValueError(f"{label} inválido: {e}")
    return values


class OrderResponse(BaseModel):
    order_id: UUID
    courier_id: Optional[UUID] = None
    weight: float
    region: int
    delivery_hours: List[str]
    cost: int
    completed_time: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderGroupResponse(BaseModel):
    group_order_id: UUID
    orders: List[OrderResponse]


class CourierAssignmentResponse(BaseModel):
    courier_id: UUID
    orders: List[OrderGroupResponse]


class AssignmentsResponse(BaseResponse):
    date: date
    couriers: List[CourierAssignmentResponse]
