# app/modules/orders/schemas.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List
from datetime import datetime
from uuid import UUID

from app.shared.schemas.assignments import (
    AssignmentsResponse, OrderResponse, validate_time_ranges
)
from app.shared.schemas.common import BaseResponse


class CreateOrderRequest(BaseModel):
    weight: float = Field(..., gt=0, description="Peso en kilogramos")
    region: int = Field(..., ge=0, description="Región de entrega")
    delivery_hours: List[str] = Field(..., description="Ventanas de entrega, formato HH:MM-HH:MM")
    cost: int = Field(..., ge=0, description="Costo de la orden")

    @field_validator('delivery_hours')
    @classmethod
    def validate_delivery_hours(cls, v: List[str]) -> List[str]:
        return validate_time_ranges(v, "Horario de entrega")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "weight": 4.5,
            "region": 1,
            "delivery_hours": ["11:00-12:00"],
            "cost": 350
        }
    })


class CreateOrdersRequest(BaseModel):
    orders: List[CreateOrderRequest]


class CompleteInfo(BaseModel):
    courier_id: UUID
    order_id: UUID
    complete_time: datetime


class CompleteOrdersRequest(BaseModel):
    complete_info: List[CompleteInfo]


class OrdersResponse(BaseResponse):
    orders: List[OrderResponse]
    count: int


class OrderListResponse(OrdersResponse):
    limit: int
    offset: int


class AssignOrdersResponse(AssignmentsResponse):
    unassigned_orders: List[UUID]
