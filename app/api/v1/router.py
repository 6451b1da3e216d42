# app/api/v1/router.py
from fastapi import APIRouter
from app.modules.couriers.router import router as couriers_router
from app.modules.orders.router import router as orders_router


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(
    couriers_router,
    prefix="/couriers",
    tags=["Couriers"]
)

api_router.include_router(
    orders_router,
    prefix="/orders",
    tags=["Orders"]
)
