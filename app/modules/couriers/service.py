# app/modules/couriers/service.py
from typing import Optional
from datetime import date, datetime, time
from uuid import UUID
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from app.modules.assignment import OrderInfo, calculate_meta_info, rebuild_assignments
from app.modules.assignment.exceptions import (
    CourierNotFoundError, DateRangeTooShortError, InvalidDateRangeError
)
from app.shared.schemas.assignments import AssignmentsResponse
from .repository import CouriersRepository
from .schemas import (
    CreateCouriersRequest, CourierResponse, CouriersResponse,
    CourierListResponse, CourierMetaInfoResponse
)

logger = logging.getLogger(__name__)

class CouriersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CouriersRepository(db)

    async def create_couriers(self, request: CreateCouriersRequest) -> CouriersResponse:
        """Registrar couriers nuevos"""
        couriers_data = [courier.model_dump(mode="json") for courier in request.couriers]

        try:
            couriers = self.repository.create_couriers(couriers_data)
        except Exception as e:
            logger.error(f"❌ Error creando couriers: {e}")
            raise HTTPException(status_code=500, detail="Error registrando couriers")

        return CouriersResponse(
            success=True,
            message=f"{len(couriers)} couriers registrados",
            couriers=[CourierResponse.model_validate(c) for c in couriers],
            count=len(couriers)
        )

    async def get_courier(self, courier_id: UUID) -> CourierResponse:
        courier = self.repository.get_courier(courier_id)

        if not courier:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Courier {courier_id} no encontrado"
            )

        return CourierResponse.model_validate(courier)

    async def get_couriers(self, limit: int, offset: int) -> CourierListResponse:
        couriers = self.repository.get_couriers(limit, offset)

        return CourierListResponse(
            success=True,
            message="Couriers registrados",
            couriers=[CourierResponse.model_validate(c) for c in couriers],
            count=len(couriers),
            limit=limit,
            offset=offset
        )

    async def get_meta_info(self, courier_id: UUID, start_date: date, end_date: date) -> CourierMetaInfoResponse:
        """Rating y ganancias del courier para órdenes completadas en [start_date, end_date]"""
        courier = self.repository.get_courier(courier_id)

        if not courier:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Courier {courier_id} no encontrado"
            )

        start = datetime.combine(start_date, time.min)
        end = datetime.combine(end_date, time.min)

        costs = self.repository.get_completed_costs(courier_id, start, end)

        try:
            meta_info = calculate_meta_info(courier.courier_type, costs, start, end)
        except (InvalidDateRangeError, DateRangeTooShortError) as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        return CourierMetaInfoResponse(
            success=True,
            message=f"Meta información del courier {courier_id}",
            courier=CourierResponse.model_validate(courier),
            start_date=start_date,
            end_date=end_date,
            rating=meta_info.rating,
            earnings=meta_info.earnings
        )

    async def get_assignments(self, target_date: date, courier_id: Optional[UUID] = None) -> AssignmentsResponse:
        """Reconstruir las asignaciones confirmadas para una fecha"""
        include_all_couriers = courier_id is None

        if not include_all_couriers and not self.repository.get_courier(courier_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Courier {courier_id} no encontrado"
            )

        orders = [OrderInfo.from_record(o) for o in self.repository.get_distributed_orders(target_date)]
        courier_types = self.repository.get_courier_types(
            o.courier_id for o in orders if o.courier_id is not None
        )

        try:
            assignments = rebuild_assignments(
                orders,
                courier_types,
                courier_filter=courier_id,
                include_all_couriers=include_all_couriers
            )
        except CourierNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        return AssignmentsResponse(
            success=True,
            message=f"Asignaciones del {target_date.isoformat()}",
            date=target_date,
            couriers=[assignment.to_dict() for assignment in assignments]
        )
