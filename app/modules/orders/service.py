# app/modules/orders/service.py
from datetime import date, datetime, timezone
from uuid import UUID
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.modules.assignment import (
    CourierInfo, OrderInfo, VehicleType, assign_orders, finalize_plan
)
from app.modules.assignment.exceptions import (
    AssignmentCommitError, CompletionMismatchError, CourierNotFoundError, OrderNotFoundError
)
from app.modules.couriers.repository import CouriersRepository
from app.shared.schemas.assignments import OrderResponse
from .repository import OrdersRepository
from .schemas import (
    CreateOrdersRequest, CompleteOrdersRequest, OrdersResponse,
    OrderListResponse, AssignOrdersResponse
)

logger = logging.getLogger(__name__)

def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

class OrdersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = OrdersRepository(db)
        self.couriers = CouriersRepository(db)

    async def create_orders(self, request: CreateOrdersRequest) -> OrdersResponse:
        """Registrar órdenes nuevas (sin courier ni fecha de distribución)"""
        orders_data = [order.model_dump() for order in request.orders]

        try:
            orders = self.repository.create_orders(orders_data)
        except Exception as e:
            logger.error(f"❌ Error creando órdenes: {e}")
            raise HTTPException(status_code=500, detail="Error registrando órdenes")

        return OrdersResponse(
            success=True,
            message=f"{len(orders)} órdenes registradas",
            orders=[OrderResponse.model_validate(o) for o in orders],
            count=len(orders)
        )

    async def get_order(self, order_id: UUID) -> OrderResponse:
        order = self.repository.get_order(order_id)

        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Orden {order_id} no encontrada"
            )

        return OrderResponse.model_validate(order)

    async def get_orders(self, limit: int, offset: int) -> OrderListResponse:
        orders = self.repository.get_orders(limit, offset)

        return OrderListResponse(
            success=True,
            message="Órdenes registradas",
            orders=[OrderResponse.model_validate(o) for o in orders],
            count=len(orders),
            limit=limit,
            offset=offset
        )

    async def complete_orders(self, request: CompleteOrdersRequest) -> OrdersResponse:
        """
        Marcar órdenes como completadas.

        Todas o ninguna: si alguna orden no cumple las validaciones se
        revierte el lote completo.
        """
        completed = []

        try:
            for info in request.complete_info:
                order = self.repository.get_order(info.order_id)
                if not order:
                    raise OrderNotFoundError(info.order_id)

                if not self.repository.courier_exists(info.courier_id):
                    raise CourierNotFoundError(info.courier_id)

                if order.courier_id != info.courier_id:
                    raise CompletionMismatchError(
                        f"La orden {info.order_id} no está asignada al courier {info.courier_id}"
                    )

                # El día se compara en el huso horario enviado por el cliente
                if order.distribution_date != info.complete_time.date():
                    raise CompletionMismatchError(
                        f"complete_time no coincide con la fecha de distribución de la orden {info.order_id}"
                    )

                # Una orden ya completada conserva su primera hora de finalización
                if order.completed_time is None:
                    self.repository.set_completed_time(order, _naive_utc(info.complete_time))

                completed.append(order)

            self.repository.commit()

        except (OrderNotFoundError, CourierNotFoundError, CompletionMismatchError) as e:
            self.repository.rollback()
            logger.warning(f"⚠️ Finalización rechazada: {e}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        logger.info(f"✅ {len(completed)} órdenes completadas")

        return OrdersResponse(
            success=True,
            message=f"{len(completed)} órdenes completadas",
            orders=[OrderResponse.model_validate(o) for o in completed],
            count=len(completed)
        )

    async def set_courier(self, order_id: UUID, courier_id: UUID) -> OrderResponse:
        """Asignación manual de courier a una orden"""
        order = self.repository.get_order(order_id)

        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Orden {order_id} no encontrada"
            )

        if not self.repository.courier_exists(courier_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Courier {courier_id} no encontrado"
            )

        try:
            order = self.repository.set_courier_id(order, courier_id)
        except Exception as e:
            logger.error(f"❌ Error asignando courier a la orden {order_id}: {e}")
            raise HTTPException(status_code=500, detail="Error asignando courier")

        return OrderResponse.model_validate(order)

    async def assign(self, target_date: date) -> AssignOrdersResponse:
        """
        Ejecutar una corrida de asignación para la fecha.

        Cada orden colocada se persiste por separado; si una escritura
        falla la corrida se aborta y las ya confirmadas se mantienen.
        """
        orders = [OrderInfo.from_record(o) for o in self.repository.get_orders_for_assign()]
        rosters = {
            vehicle_type: [
                CourierInfo.from_record(c)
                for c in self.couriers.get_couriers_by_type(vehicle_type.value)
            ]
            for vehicle_type in VehicleType
        }

        plan = assign_orders(
            orders,
            rosters[VehicleType.FOOT],
            rosters[VehicleType.BIKE],
            rosters[VehicleType.AUTO]
        )

        try:
            assignments = finalize_plan(plan, target_date, self.repository.commit_assignment)
        except AssignmentCommitError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Asignación interrumpida: {e}"
            )

        return AssignOrdersResponse(
            success=True,
            message=f"{plan.placed_count} órdenes asignadas para {target_date.isoformat()}",
            date=target_date,
            couriers=[assignment.to_dict() for assignment in assignments],
            unassigned_orders=plan.unassigned_order_ids
        )
