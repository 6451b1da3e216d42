# app/modules/assignment/models.py
"""Estructuras en memoria que consume y produce el motor de asignación"""
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from .policy import VehicleType


@dataclass(frozen=True)
class CourierInfo:
    courier_id: uuid.UUID
    courier_type: VehicleType
    regions: Tuple[int, ...]
    working_hours: Tuple[str, ...]

    @classmethod
    def from_record(cls, record) -> "CourierInfo":
        return cls(
            courier_id=record.courier_id,
            courier_type=VehicleType(record.courier_type),
            regions=tuple(record.regions or ()),
            working_hours=tuple(record.working_hours or ()),
        )


@dataclass(frozen=True)
class OrderInfo:
    order_id: uuid.UUID
    weight: float
    region: int
    delivery_hours: Tuple[str, ...]
    cost: int
    courier_id: Optional[uuid.UUID] = None
    completed_time: Optional[datetime] = None
    distribution_date: Optional[date] = None

    @classmethod
    def from_record(cls, record) -> "OrderInfo":
        return cls(
            order_id=record.order_id,
            weight=record.weight,
            region=record.region,
            delivery_hours=tuple(record.delivery_hours or ()),
            cost=record.cost,
            courier_id=record.courier_id,
            completed_time=record.completed_time,
            distribution_date=record.distribution_date,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_id": self.order_id,
            "courier_id": self.courier_id,
            "weight": self.weight,
            "region": self.region,
            "delivery_hours": list(self.delivery_hours),
            "cost": self.cost,
            "completed_time": self.completed_time,
        }


@dataclass
class OrderGroup:
    """Lote de órdenes entregadas juntas por un courier en una región"""
    orders: List[OrderInfo] = field(default_factory=list)
    group_order_id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def seeded(cls, order: OrderInfo) -> "OrderGroup":
        return cls(orders=[order])

    def __len__(self) -> int:
        return len(self.orders)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_order_id": self.group_order_id,
            "orders": [order.to_dict() for order in self.orders],
        }


@dataclass
class CourierAssignment:
    """Proyección de reporte: un courier con todos sus grupos"""
    courier_id: uuid.UUID
    orders: List[OrderGroup] = field(default_factory=list)

    def order_ids(self) -> List[uuid.UUID]:
        return [order.order_id for group in self.orders for order in group.orders]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "courier_id": self.courier_id,
            "orders": [group.to_dict() for group in self.orders],
        }
