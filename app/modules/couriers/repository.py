# app/modules/couriers/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import Dict, Iterable, List, Optional
from datetime import date, datetime
from uuid import UUID
import logging

from app.shared.database.models import Courier, Order

logger = logging.getLogger(__name__)

class CouriersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_couriers(self, couriers_data: List[Dict]) -> List[Courier]:
        """Crear couriers en una sola transacción"""
        couriers = [
            Courier(
                courier_type=data['courier_type'],
                regions=list(data['regions']),
                working_hours=list(data['working_hours'])
            )
            for data in couriers_data
        ]

        try:
            self.db.add_all(couriers)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for courier in couriers:
            self.db.refresh(courier)

        logger.info(f"✅ {len(couriers)} couriers creados")
        return couriers

    def get_courier(self, courier_id: UUID) -> Optional[Courier]:
        return self.db.query(Courier).filter(Courier.courier_id == courier_id).first()

    def get_couriers(self, limit: int, offset: int) -> List[Courier]:
        return self.db.query(Courier).order_by(
            Courier.created_at.asc(), Courier.courier_id.asc()
        ).offset(offset).limit(limit).all()

    def count_couriers(self) -> int:
        return self.db.query(Courier).count()

    def get_couriers_by_type(self, courier_type: str) -> List[Courier]:
        """Roster de un tipo exacto de vehículo, en orden de creación"""
        return self.db.query(Courier).filter(
            Courier.courier_type == courier_type
        ).order_by(Courier.created_at.asc(), Courier.courier_id.asc()).all()

    def get_courier_types(self, courier_ids: Iterable[UUID]) -> Dict[UUID, str]:
        ids = set(courier_ids)
        if not ids:
            return {}

        rows = self.db.query(Courier.courier_id, Courier.courier_type).filter(
            Courier.courier_id.in_(ids)
        ).all()
        return {row.courier_id: row.courier_type for row in rows}

    def get_completed_costs(self, courier_id: UUID, start: datetime, end: datetime) -> List[int]:
        """Costo de cada orden del courier completada entre start y end (inclusive)"""
        rows = self.db.query(Order.cost).filter(
            and_(
                Order.courier_id == courier_id,
                Order.completed_time.isnot(None),
                Order.completed_time.between(start, end)
            )
        ).all()
        return [row.cost for row in rows]

    def get_distributed_orders(self, target_date: date) -> List[Order]:
        """Órdenes distribuidas en la fecha, en orden estable"""
        return self.db.query(Order).filter(
            Order.distribution_date == target_date
        ).order_by(Order.created_at.asc(), Order.order_id.asc()).all()
