# app/modules/orders/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import Dict, List, Optional
from datetime import date, datetime
from uuid import UUID
import logging

from app.modules.assignment.policy import MAX_ASSIGNABLE_WEIGHT
from app.shared.database.models import Courier, Order

logger = logging.getLogger(__name__)

class OrdersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_orders(self, orders_data: List[Dict]) -> List[Order]:
        """Crear órdenes en una sola transacción"""
        orders = [
            Order(
                weight=data['weight'],
                region=data['region'],
                delivery_hours=list(data['delivery_hours']),
                cost=data['cost']
            )
            for data in orders_data
        ]

        try:
            self.db.add_all(orders)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for order in orders:
            self.db.refresh(order)

        logger.info(f"✅ {len(orders)} órdenes creadas")
        return orders

    def get_order(self, order_id: UUID) -> Optional[Order]:
        return self.db.query(Order).filter(Order.order_id == order_id).first()

    def get_orders(self, limit: int, offset: int) -> List[Order]:
        return self.db.query(Order).order_by(
            Order.created_at.asc(), Order.order_id.asc()
        ).offset(offset).limit(limit).all()

    def courier_exists(self, courier_id: UUID) -> bool:
        return self.db.query(Courier.courier_id).filter(Courier.courier_id == courier_id).first() is not None

    def get_orders_for_assign(self) -> List[Order]:
        """Órdenes sin fecha de distribución y con peso menor al límite asignable"""
        return self.db.query(Order).filter(
            and_(
                Order.weight < MAX_ASSIGNABLE_WEIGHT,
                Order.distribution_date.is_(None)
            )
        ).order_by(Order.created_at.asc(), Order.order_id.asc()).all()

    def commit_assignment(self, order_id: UUID, distribution_date: date, courier_id: UUID) -> None:
        """Persistir courier y fecha de distribución de UNA orden (commit propio)"""
        try:
            updated = self.db.query(Order).filter(Order.order_id == order_id).update(
                {
                    Order.distribution_date: distribution_date,
                    Order.courier_id: courier_id
                },
                synchronize_session=False
            )
            if not updated:
                raise LookupError(f"Orden {order_id} no existe")
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def set_courier_id(self, order: Order, courier_id: UUID) -> Order:
        order.courier_id = courier_id
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def set_completed_time(self, order: Order, completed_time: datetime) -> Order:
        order.completed_time = completed_time
        self.db.flush()
        return order

    def commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def rollback(self) -> None:
        self.db.rollback()
