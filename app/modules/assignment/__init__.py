# app/modules/assignment/__init__.py
"""
Módulo Assignment - Motor de asignación de órdenes a couriers

Componentes (de hojas a raíz):
- time_windows.py: parseo de rangos "HH:MM-HH:MM" y verificación de traslape
- policy.py: parámetros fijos por tipo de vehículo
- grouping.py: tracker de grupos y minutos restantes por (courier, región)
- engine.py: cascada por peso, first-fit y confirmación por orden
- reconstruction.py: vista de reporte de asignaciones ya confirmadas
- meta_info.py: rating y ganancias de un courier

Todo opera sobre colecciones en memoria; la persistencia la hacen
los repositorios de los módulos couriers y orders.
"""

from .engine import AssignmentPlan, assign_orders, finalize_plan
from .meta_info import MetaInfo, calculate_meta_info
from .models import CourierAssignment, CourierInfo, OrderGroup, OrderInfo
from .policy import MAX_ASSIGNABLE_WEIGHT, VehicleType
from .reconstruction import rebuild_assignments
from .time_windows import TimeRange, check_time_overlap, parse_time_range

__all__ = [
    "AssignmentPlan",
    "assign_orders",
    "finalize_plan",
    "MetaInfo",
    "calculate_meta_info",
    "CourierAssignment",
    "CourierInfo",
    "OrderGroup",
    "OrderInfo",
    "MAX_ASSIGNABLE_WEIGHT",
    "VehicleType",
    "rebuild_assignments",
    "TimeRange",
    "check_time_overlap",
    "parse_time_range",
]
