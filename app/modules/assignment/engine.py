# app/modules/assignment/engine.py
"""
Motor de asignación órdenes -> couriers.

Heurística greedy first-fit:
1. Órdenes ordenadas por peso descendente
2. Cascada de tipos de vehículo según el peso (AUTO, BIKE, FOOT)
3. Por cada courier del roster que cubra la región de la orden, por cada
   par (ventana laboral, ventana de entrega) en orden de entrada, se
   verifica el traslape mínimo y se delega al GroupingTracker
4. La primera combinación aceptada gana; si ninguna acepta, la orden
   queda sin asignar en esta corrida (no es un error)

finalize_plan construye la proyección CourierAssignment y persiste cada
orden por separado mediante el sink recibido.
"""
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

from .exceptions import AssignmentCommitError
from .grouping import GroupingTracker, RegionSlot
from .models import CourierAssignment, CourierInfo, OrderGroup, OrderInfo
from .policy import VehicleType, eligible_vehicle_types, get_policy
from .time_windows import check_time_overlap, parse_time_range

logger = logging.getLogger(__name__)

CommitSink = Callable[[uuid.UUID, date, uuid.UUID], None]


@dataclass
class AssignmentPlan:
    tracker: GroupingTracker
    unassigned_order_ids: List[uuid.UUID] = field(default_factory=list)
    placed_count: int = 0

    def by_courier(self) -> Dict[uuid.UUID, Dict[int, RegionSlot]]:
        return self.tracker.slots_by_courier()


def _try_roster(
    couriers: Sequence[CourierInfo],
    order: OrderInfo,
    tracker: GroupingTracker
) -> bool:
    delivery_ranges = [parse_time_range(hours) for hours in order.delivery_hours]

    for courier in couriers:
        if order.region not in courier.regions:
            continue

        policy = get_policy(courier.courier_type)

        for working_hours in courier.working_hours:
            working_range = parse_time_range(working_hours)
            for delivery_range in delivery_ranges:
                if not check_time_overlap(working_range, delivery_range, policy.min_overlap_minutes):
                    continue
                if tracker.try_place(courier, order, working_range.minutes):
                    return True

    return False


def assign_orders(
    orders: Sequence[OrderInfo],
    foot_couriers: Sequence[CourierInfo],
    bike_couriers: Sequence[CourierInfo],
    auto_couriers: Sequence[CourierInfo]
) -> AssignmentPlan:
    """Asignar órdenes sin distribuir a los rosters recibidos (uno por tipo)"""
    rosters = {
        VehicleType.FOOT: list(foot_couriers),
        VehicleType.BIKE: list(bike_couriers),
        VehicleType.AUTO: list(auto_couriers),
    }
    plan = AssignmentPlan(tracker=GroupingTracker())

    logger.info(
        f"🚚 Asignando {len(orders)} órdenes - "
        f"FOOT: {len(rosters[VehicleType.FOOT])}, "
        f"BIKE: {len(rosters[VehicleType.BIKE])}, "
        f"AUTO: {len(rosters[VehicleType.AUTO])}"
    )

    for order in sorted(orders, key=lambda o: o.weight, reverse=True):
        placed = False
        for vehicle_type in eligible_vehicle_types(order.weight):
            if _try_roster(rosters[vehicle_type], order, plan.tracker):
                placed = True
                break

        if placed:
            plan.placed_count += 1
        else:
            logger.debug(f"Orden {order.order_id} ({order.weight} kg) sin courier disponible")
            plan.unassigned_order_ids.append(order.order_id)

    logger.info(f"✅ {plan.placed_count} órdenes asignadas, {len(plan.unassigned_order_ids)} sin asignar")
    return plan


def build_assignments(plan: AssignmentPlan, target_date: Optional[date] = None) -> List[CourierAssignment]:
    """Proyección CourierAssignment con el courier (y la fecha) ya resueltos en cada orden"""
    assignments = []
    for courier_id, regions in plan.by_courier().items():
        assignment = CourierAssignment(courier_id=courier_id)
        for slot in regions.values():
            for group in slot.groups:
                assignment.orders.append(OrderGroup(
                    group_order_id=group.group_order_id,
                    orders=[
                        replace(order, courier_id=courier_id, distribution_date=target_date)
                        for order in group.orders
                    ]
                ))
        assignments.append(assignment)
    return assignments


def finalize_plan(plan: AssignmentPlan, target_date: date, commit: CommitSink) -> List[CourierAssignment]:
    """
    Construir los CourierAssignment y persistir cada orden colocada.

    Cada orden se confirma por separado. Si el sink falla la corrida se
    aborta; las órdenes ya confirmadas quedan confirmadas.
    """
    assignments = build_assignments(plan, target_date)
    committed = 0

    for assignment in assignments:
        for order_id in assignment.order_ids():
            try:
                commit(order_id, target_date, assignment.courier_id)
            except Exception as e:
                logger.error(f"❌ Error confirmando orden {order_id}: {e}")
                raise AssignmentCommitError(order_id, committed, e) from e
            committed += 1

    logger.info(f"📦 {committed} órdenes confirmadas para {target_date.isoformat()}")
    return assignments
