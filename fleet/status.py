"""Enums for service order status and maintenance type."""

from enum import Enum


class OrderStatus(Enum):
    """Service order lifecycle states. Higher rank = further along."""

    ABIERTA = "Abierta"
    EN_PROGRESO = "En Progreso"
    CERRADA = "Cerrada"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    OrderStatus.ABIERTA: 1,
    OrderStatus.EN_PROGRESO: 2,
    OrderStatus.CERRADA: 3,
}


class OrderType(Enum):
    """Scheduled (preventive) vs unscheduled (corrective) maintenance."""

    PREVENTIVO = "Preventivo"
    CORRECTIVO = "Correctivo"
