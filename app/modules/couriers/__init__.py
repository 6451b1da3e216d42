# app/modules/couriers/__init__.py
"""
Módulo Couriers - Registro y reportes de couriers

Este módulo implementa:
- Registro y consulta de couriers (FOOT, BIKE, AUTO)
- Meta información: rating y ganancias en un rango de fechas
- Reconstrucción de asignaciones confirmadas por fecha

Arquitectura:
- router.py: Endpoints de couriers
- service.py: Lógica de negocio de couriers
- repository.py: Acceso a datos de couriers
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import CouriersService
from .repository import CouriersRepository

__all__ = [
    "router",
    "CouriersService",
    "CouriersRepository"
]
