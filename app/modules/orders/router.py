# app/modules/orders/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from app.config.database import get_db
from app.shared.schemas.assignments import OrderResponse
from .service import OrdersService
from .schemas import (
    CreateOrdersRequest, CompleteOrdersRequest, OrdersResponse,
    OrderListResponse, AssignOrdersResponse
)

router = APIRouter()

@router.get("/", response_model=OrderListResponse)
async def get_orders(
    limit: int = Query(1, ge=0, description="Cantidad máxima de resultados"),
    offset: int = Query(0, ge=0, description="Desplazamiento de resultados"),
    db: Session = Depends(get_db)
):
    """Listar órdenes registradas (paginado con limit/offset)"""
    service = OrdersService(db)
    return await service.get_orders(limit, offset)

@router.post("/", response_model=OrdersResponse)
async def create_orders(
    request: CreateOrdersRequest,
    db: Session = Depends(get_db)
):
    """
    Registrar órdenes

    **Validaciones:**
    - weight > 0
    - region >= 0
    - cost >= 0
    - delivery_hours: formato HH:MM-HH:MM con fin posterior al inicio
    """
    service = OrdersService(db)
    return await service.create_orders(request)

@router.post("/complete", response_model=OrdersResponse)
async def complete_orders(
    request: CompleteOrdersRequest,
    db: Session = Depends(get_db)
):
    """
    Marcar órdenes como completadas

    **Validaciones:**
    - La orden y el courier deben existir
    - La orden debe estar asignada a ese courier
    - complete_time debe caer en la fecha de distribución de la orden
    """
    service = OrdersService(db)
    return await service.complete_orders(request)

@router.put("/set_courier", response_model=OrderResponse)
async def set_courier(
    order_id: UUID = Query(..., description="ID de la orden"),
    courier_id: UUID = Query(..., description="ID del courier"),
    db: Session = Depends(get_db)
):
    """Asignar manualmente un courier a una orden"""
    service = OrdersService(db)
    return await service.set_courier(order_id, courier_id)

@router.post("/assign", response_model=AssignOrdersResponse)
async def assign_orders(
    target_date: Optional[date] = Query(None, alias="date", description="Fecha de distribución (por defecto hoy)"),
    db: Session = Depends(get_db)
):
    """
    Asignar órdenes pendientes a couriers

    **Algoritmo:**
    - Órdenes ordenadas por peso descendente
    - > 20 kg: solo AUTO; > 10 kg: AUTO y luego BIKE; resto: AUTO, BIKE, FOOT
    - Primer courier con región, ventana horaria y capacidad disponibles
    - Órdenes sin courier quedan en unassigned_orders para la próxima corrida

    **Importante:** no ejecutar dos corridas simultáneas para la misma fecha.
    """
    service = OrdersService(db)
    return await service.assign(target_date or date.today())

@router.get("/health")
async def orders_health():
    """Health check del módulo orders"""
    return {
        "service": "orders",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Registro de órdenes",
            "Finalización de órdenes",
            "Asignación manual de courier",
            "Asignación automática por capacidad y horario"
        ]
    }

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID = Path(..., description="ID de la orden"),
    db: Session = Depends(get_db)
):
    """Obtener una orden por ID"""
    service = OrdersService(db)
    return await service.get_order(order_id)
