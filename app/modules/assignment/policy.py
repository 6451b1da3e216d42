# app/modules/assignment/policy.py
"""
Parámetros fijos por tipo de vehículo.

Sin lógica aquí: solo las constantes que usan el tracker de grupos,
el motor de asignación y el cálculo de meta-información.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class VehicleType(str, Enum):
    """Tipos de courier"""
    FOOT = "FOOT"
    BIKE = "BIKE"
    AUTO = "AUTO"


@dataclass(frozen=True)
class VehiclePolicy:
    min_overlap_minutes: int
    max_regions: int
    max_orders_per_group: int
    minutes_per_extra_order: int
    cost_coefficient: int
    rating_coefficient: int


POLICIES: Dict[VehicleType, VehiclePolicy] = {
    VehicleType.FOOT: VehiclePolicy(
        min_overlap_minutes=25,
        max_regions=1,
        max_orders_per_group=2,
        minutes_per_extra_order=10,
        cost_coefficient=2,
        rating_coefficient=3,
    ),
    VehicleType.BIKE: VehiclePolicy(
        min_overlap_minutes=12,
        max_regions=2,
        max_orders_per_group=4,
        minutes_per_extra_order=8,
        cost_coefficient=3,
        rating_coefficient=2,
    ),
    VehicleType.AUTO: VehiclePolicy(
        min_overlap_minutes=8,
        max_regions=3,
        max_orders_per_group=7,
        minutes_per_extra_order=4,
        cost_coefficient=4,
        rating_coefficient=1,
    ),
}

# Órdenes con peso >= 40 kg nunca entran a una corrida de asignación
MAX_ASSIGNABLE_WEIGHT = 40

AUTO_ONLY_WEIGHT = 20
NO_FOOT_WEIGHT = 10


def get_policy(vehicle_type) -> VehiclePolicy:
    return POLICIES[VehicleType(vehicle_type)]


def eligible_vehicle_types(weight: float) -> List[VehicleType]:
    """Cascada de tipos a intentar, en orden, según el peso de la orden"""
    if weight > AUTO_ONLY_WEIGHT:
        return [VehicleType.AUTO]
    if weight > NO_FOOT_WEIGHT:
        return [VehicleType.AUTO, VehicleType.BIKE]
    return [VehicleType.AUTO, VehicleType.BIKE, VehicleType.FOOT]
