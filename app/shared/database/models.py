# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Float, JSON, Uuid,
    ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import declarative_base, relationship
import uuid
from datetime import datetime

Base = declarative_base()

# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, default=datetime.now, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# COURIERS Y ÓRDENES
# =====================================================

class Courier(Base, TimestampMixin):
    """Courier con tipo de vehículo, regiones y horario laboral"""
    __tablename__ = "couriers"

    courier_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    courier_type = Column(String(4), nullable=False, index=True)
    regions = Column(JSON, nullable=False, default=list)
    working_hours = Column(JSON, nullable=False, default=list)

    # Relationships
    orders = relationship("Order", back_populates="courier")

    __table_args__ = (
        CheckConstraint("courier_type IN ('FOOT', 'BIKE', 'AUTO')", name="check_courier_type"),
    )


class Order(Base, TimestampMixin):
    """Orden de entrega"""
    __tablename__ = "orders"

    order_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    courier_id = Column(Uuid, ForeignKey("couriers.courier_id"), nullable=True, index=True)
    weight = Column(Float, nullable=False)
    region = Column(Integer, nullable=False)
    delivery_hours = Column(JSON, nullable=False, default=list)
    cost = Column(Integer, nullable=False, default=0)
    completed_time = Column(DateTime, nullable=True)
    # NULL = orden aún no distribuida
    distribution_date = Column(Date, nullable=True, index=True)

    # Relationships
    courier = relationship("Courier", back_populates="orders")

    __table_args__ = (
        CheckConstraint("weight > 0", name="check_order_weight_positive"),
        CheckConstraint("region >= 0", name="check_order_region_non_negative"),
        CheckConstraint("cost >= 0", name="check_order_cost_non_negative"),
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_time is not None
