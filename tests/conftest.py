import os
import uuid

import pytest

# La app lee la configuración al importarse: SQLite en memoria y sin rate limiter
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMITER"] = "DISABLE"

from fastapi.testclient import TestClient

from app.config.database import SessionLocal, engine
from app.main import app
from app.modules.assignment import CourierInfo, OrderInfo, VehicleType
from app.shared.database.models import Base


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


def make_courier(courier_type, regions, working_hours, courier_id=None):
    return CourierInfo(
        courier_id=courier_id or uuid.uuid4(),
        courier_type=VehicleType(courier_type),
        regions=tuple(regions),
        working_hours=tuple(working_hours),
    )


def make_order(weight, region, delivery_hours, cost=100, courier_id=None, order_id=None):
    return OrderInfo(
        order_id=order_id or uuid.uuid4(),
        weight=weight,
        region=region,
        delivery_hours=tuple(delivery_hours),
        cost=cost,
        courier_id=courier_id,
    )
