# -*- coding: utf-8 -*-
"""
Gestión de estado de la plantilla: cambios de estado, suspensiones con fecha
de retorno y reactivación automática al vencer la sanción.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from modelos import Empleado, ErrorValidacion, EstadoEmpleado, convertir_enum

_logger = logging.getLogger(__name__)


def validar_empleado(empleado: Empleado) -> Empleado:
    if empleado.salario_base_semanal is None or empleado.salario_base_semanal <= 0:
        raise ErrorValidacion(f"El salario base semanal de {empleado.id} debe ser mayor a cero.")
    if empleado.bono_semanal < 0:
        raise ErrorValidacion(f"El bono semanal de {empleado.id} no puede ser negativo.")
    suspendido = empleado.estado is EstadoEmpleado.SUSPENDIDO
    if suspendido != (empleado.suspendido_hasta is not None):
        raise ErrorValidacion(
            f"La fecha de fin de suspensión de {empleado.id} solo puede existir si está suspendido."
        )
    return empleado


def cambiar_estado(empleado: Empleado, nuevo_estado: Any) -> Empleado:
    """Cambio de estado que no es suspensión; siempre limpia la fecha de retorno."""
    nuevo_estado = convertir_enum(EstadoEmpleado, nuevo_estado)
    if nuevo_estado is EstadoEmpleado.SUSPENDIDO:
        raise ErrorValidacion("Para suspender a un empleado use suspender() con los días de sanción.")
    _logger.info("Estado de %s: %s -> %s", empleado.id, empleado.estado.value, nuevo_estado.value)
    return replace(empleado, estado=nuevo_estado, suspendido_hasta=None)


def suspender(empleado: Empleado, dias: int, desde: Optional[date] = None) -> Empleado:
    if dias <= 0:
        raise ErrorValidacion(f"Los días de suspensión deben ser mayores a cero (recibido: {dias}).")
    retorno = (desde or date.today()) + relativedelta(days=dias)
    _logger.info("Sanción aplicada a %s: retorno el %s", empleado.id, retorno.isoformat())
    return replace(empleado, estado=EstadoEmpleado.SUSPENDIDO, suspendido_hasta=retorno)


def reactivar_suspensiones_vencidas(
    empleados: Iterable[Empleado], hoy: Optional[date] = None
) -> Tuple[List[Empleado], List[str]]:
    """
    Devuelve la plantilla con los suspendidos cuya sanción venció de nuevo
    activos, y los ids reactivados.
    """
    hoy = hoy or date.today()
    plantilla: List[Empleado] = []
    reactivados: List[str] = []
    for empleado in empleados:
        if (
            empleado.estado is EstadoEmpleado.SUSPENDIDO
            and empleado.suspendido_hasta is not None
            and hoy >= empleado.suspendido_hasta
        ):
            empleado = cambiar_estado(empleado, EstadoEmpleado.ACTIVO)
            reactivados.append(empleado.id)
        plantilla.append(empleado)
    return plantilla, reactivados


def actualizar_bono(empleado: Empleado, monto: float) -> Empleado:
    if monto < 0:
        raise ErrorValidacion(f"El bono no puede ser negativo (recibido: {monto}).")
    return replace(empleado, bono_semanal=monto)
