# app/modules/assignment/exceptions.py


class AssignmentError(Exception):
    """Error base del motor de asignación"""


class InvalidTimeRangeError(AssignmentError, ValueError):
    """Rango horario con formato inválido o fin anterior/igual al inicio"""


class CourierNotFoundError(AssignmentError):
    def __init__(self, courier_id):
        self.courier_id = courier_id
        super().__init__(f"Courier {courier_id} no encontrado")


class OrderNotFoundError(AssignmentError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Orden {order_id} no encontrada")


class InvalidDateRangeError(AssignmentError):
    """end_date debe ser estrictamente posterior a start_date"""


class DateRangeTooShortError(AssignmentError):
    """El rango de fechas dura menos de una hora"""


class CompletionMismatchError(AssignmentError):
    """La información de finalización no coincide con la orden"""


class AssignmentCommitError(AssignmentError):
    """Falló la persistencia de una orden durante la asignación"""

    def __init__(self, order_id, committed: int, cause: Exception):
        self.order_id = order_id
        self.committed = committed
        self.cause = cause
        super().__init__(
            f"Error guardando la orden {order_id} "
            f"({committed} órdenes ya confirmadas): {cause}"
        )
