# app/modules/assignment/reconstruction.py
"""
Reconstrucción de asignaciones ya confirmadas para reporte.

Reagrupa las órdenes distribuidas en una fecha usando solo el límite de
órdenes por grupo de cada tipo de vehículo. No revisa ventanas horarias
ni presupuesto de minutos, así que los límites de grupo pueden diferir
de los que produjo la corrida de asignación.
"""
import logging
import uuid
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .exceptions import CourierNotFoundError
from .models import CourierAssignment, OrderGroup, OrderInfo
from .policy import get_policy

logger = logging.getLogger(__name__)


def rebuild_assignments(
    orders: Sequence[OrderInfo],
    courier_types: Mapping[uuid.UUID, str],
    courier_filter: Optional[uuid.UUID] = None,
    include_all_couriers: bool = True
) -> List[CourierAssignment]:
    groups: Dict[Tuple[uuid.UUID, int], List[OrderGroup]] = {}

    for order in orders:
        if order.courier_id is None:
            continue
        if not include_all_couriers and order.courier_id != courier_filter:
            continue
        if order.courier_id not in courier_types:
            raise CourierNotFoundError(order.courier_id)

        max_orders = get_policy(courier_types[order.courier_id]).max_orders_per_group
        region_groups = groups.setdefault((order.courier_id, order.region), [])

        for group in region_groups:
            if len(group) < max_orders:
                group.orders.append(order)
                break
        else:
            region_groups.append(OrderGroup.seeded(order))

    assignments: Dict[uuid.UUID, CourierAssignment] = {}
    for (courier_id, _region), region_groups in groups.items():
        assignment = assignments.setdefault(courier_id, CourierAssignment(courier_id=courier_id))
        assignment.orders.extend(region_groups)

    logger.info(f"📋 Reconstruidas asignaciones de {len(assignments)} couriers ({len(orders)} órdenes leídas)")
    return list(assignments.values())
