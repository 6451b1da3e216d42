# app/modules/orders/__init__.py
"""
Módulo Orders - Órdenes de entrega y asignación

Este módulo implementa:
- Registro y consulta de órdenes
- Finalización de órdenes por el courier asignado
- Asignación manual de courier
- Corrida de asignación automática (motor en app.modules.assignment)

Arquitectura:
- router.py: Endpoints de órdenes
- service.py: Lógica de negocio de órdenes
- repository.py: Acceso a datos de órdenes
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import OrdersService
from .repository import OrdersRepository

__all__ = [
    "router",
    "OrdersService",
    "OrdersRepository"
]
