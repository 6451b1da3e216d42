# app/modules/assignment/grouping.py
"""
Tracker de capacidad por (courier, región).

Cada par (courier_id, region) guarda sus grupos de órdenes y un
presupuesto de minutos restantes que decae con cada orden empacada.
El presupuesto vive solo durante una corrida de asignación.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .models import CourierInfo, OrderGroup, OrderInfo
from .policy import get_policy

logger = logging.getLogger(__name__)

SlotKey = Tuple[uuid.UUID, int]


@dataclass
class RegionSlot:
    remaining_minutes: int
    groups: List[OrderGroup] = field(default_factory=list)

    def order_count(self) -> int:
        return sum(len(group) for group in self.groups)


class GroupingTracker:
    def __init__(self):
        self._slots: Dict[SlotKey, RegionSlot] = {}
        self._regions: Dict[uuid.UUID, List[int]] = {}

    def get_slot(self, courier_id: uuid.UUID, region: int):
        return self._slots.get((courier_id, region))

    def regions_of(self, courier_id: uuid.UUID) -> List[int]:
        return list(self._regions.get(courier_id, []))

    def slots(self) -> Dict[SlotKey, RegionSlot]:
        return dict(self._slots)

    def slots_by_courier(self) -> Dict[uuid.UUID, Dict[int, RegionSlot]]:
        """Vista courier -> región -> slot, en orden de creación"""
        result: Dict[uuid.UUID, Dict[int, RegionSlot]] = {}
        for (courier_id, region), slot in self._slots.items():
            result.setdefault(courier_id, {})[region] = slot
        return result

    def try_place(self, courier: CourierInfo, order: OrderInfo, window_minutes: int) -> bool:
        """
        Intentar empacar la orden para el courier en la región de la orden.

        window_minutes es la duración de la ventana laboral del courier
        que hizo match; solo se usa al abrir el primer grupo del par.
        """
        policy = get_policy(courier.courier_type)
        key = (courier.courier_id, order.region)
        slot = self._slots.get(key)

        if slot is None:
            regions = self._regions.setdefault(courier.courier_id, [])
            if len(regions) >= policy.max_regions:
                logger.debug(f"Courier {courier.courier_id} alcanzó el límite de regiones ({policy.max_regions})")
                return False

            self._slots[key] = RegionSlot(
                remaining_minutes=window_minutes - policy.min_overlap_minutes,
                groups=[OrderGroup.seeded(order)],
            )
            regions.append(order.region)
            return True

        # Primer grupo con espacio; el presupuesto es del par, no del grupo
        for group in slot.groups:
            if len(group) < policy.max_orders_per_group:
                if slot.remaining_minutes > policy.minutes_per_extra_order:
                    group.orders.append(order)
                    slot.remaining_minutes -= policy.minutes_per_extra_order
                    return True
                break

        if slot.remaining_minutes > policy.min_overlap_minutes:
            slot.groups.append(OrderGroup.seeded(order))
            slot.remaining_minutes -= policy.min_overlap_minutes
            return True

        logger.debug(
            f"Courier {courier.courier_id} sin tiempo en región {order.region}: "
            f"{slot.remaining_minutes} min restantes"
        )
        return False
