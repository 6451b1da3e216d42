# app/modules/couriers/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from app.config.database import get_db
from app.shared.schemas.assignments import AssignmentsResponse
from .service import CouriersService
from .schemas import (
    CreateCouriersRequest, CourierResponse, CouriersResponse,
    CourierListResponse, CourierMetaInfoResponse
)

router = APIRouter()

@router.get("/", response_model=CourierListResponse)
async def get_couriers(
    limit: int = Query(1, ge=0, description="Cantidad máxima de resultados"),
    offset: int = Query(0, ge=0, description="Desplazamiento de resultados"),
    db: Session = Depends(get_db)
):
    """Listar couriers registrados (paginado con limit/offset)"""
    service = CouriersService(db)
    return await service.get_couriers(limit, offset)

@router.post("/", response_model=CouriersResponse)
async def create_couriers(
    request: CreateCouriersRequest,
    db: Session = Depends(get_db)
):
    """
    Registrar couriers

    **Validaciones:**
    - courier_type: FOOT, BIKE o AUTO
    - regions: no vacío, sin valores negativos
    - working_hours: formato HH:MM-HH:MM con fin posterior al inicio
    """
    service = CouriersService(db)
    return await service.create_couriers(request)

@router.get("/assignments", response_model=AssignmentsResponse)
async def get_assignments(
    target_date: Optional[date] = Query(None, alias="date", description="Fecha de distribución (por defecto hoy)"),
    courier_id: Optional[UUID] = Query(None, description="Filtrar por courier"),
    db: Session = Depends(get_db)
):
    """
    Consultar asignaciones confirmadas de una fecha

    **Funcionalidad:**
    - Reagrupa las órdenes distribuidas por courier y región
    - Solo aplica el límite de órdenes por grupo del tipo de vehículo
    - Los IDs de grupo se generan en cada consulta
    """
    service = CouriersService(db)
    return await service.get_assignments(target_date or date.today(), courier_id)

@router.get("/meta-info/{courier_id}", response_model=CourierMetaInfoResponse)
async def get_meta_info(
    courier_id: UUID = Path(..., description="ID del courier"),
    start_date: date = Query(..., description="Fecha inicial (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Fecha final (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    """
    Rating y ganancias del courier

    - earnings = coeficiente_costo(tipo) * suma de costos
    - rating = (órdenes // horas del rango) * coeficiente_rating(tipo)
    """
    service = CouriersService(db)
    return await service.get_meta_info(courier_id, start_date, end_date)

@router.get("/health")
async def couriers_health():
    """Health check del módulo couriers"""
    return {
        "service": "couriers",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Registro de couriers",
            "Meta información (rating y ganancias)",
            "Reconstrucción de asignaciones"
        ]
    }

@router.get("/{courier_id}", response_model=CourierResponse)
async def get_courier(
    courier_id: UUID = Path(..., description="ID del courier"),
    db: Session = Depends(get_db)
):
    """Obtener un courier por ID"""
    service = CouriersService(db)
    return await service.get_courier(courier_id)
