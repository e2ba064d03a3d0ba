# -*- coding: utf-8 -*-
"""
Registro de asistencia semanal: calendario de feriados nacionales, semana
por defecto y normalización de las marcas diarias (lunes a domingo).
"""

from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta, MO

from configuracion import DIAS_LABORABLES_POR_DEFECTO, DIAS_POR_SEMANA
from modelos import Empleado, ErrorValidacion, EstadoDia, convertir_enum

# Feriados nacionales de fecha fija (mes, día)
FERIADOS_VENEZUELA = [
    (1, 1),    # Año Nuevo
    (4, 19),   # Declaración de la Independencia
    (5, 1),    # Día del Trabajador
    (6, 24),   # Batalla de Carabobo
    (7, 5),    # Día de la Independencia
    (7, 24),   # Natalicio de Simón Bolívar
    (10, 12),  # Día de la Resistencia Indígena
    (12, 24),
    (12, 25),
    (12, 31),
]

# Rotación al marcar un día: ausente -> trabajado -> feriado -> ausente
_SIGUIENTE_ESTADO = {
    EstadoDia.AUSENTE: EstadoDia.TRABAJADO,
    EstadoDia.TRABAJADO: EstadoDia.FERIADO,
    EstadoDia.FERIADO: EstadoDia.AUSENTE,
    EstadoDia.JUSTIFICADO: EstadoDia.AUSENTE,
}


def es_feriado_venezolano(fecha: date) -> bool:
    return (fecha.month, fecha.day) in FERIADOS_VENEZUELA


def fechas_semana(referencia: Optional[date] = None, cantidad: int = DIAS_POR_SEMANA) -> List[date]:
    """Fechas desde el lunes de la semana de 'referencia' (hoy por defecto)."""
    lunes = (referencia or date.today()) + relativedelta(weekday=MO(-1))
    return [lunes + relativedelta(days=i) for i in range(cantidad)]


def semana_por_defecto(
    fechas: Sequence[date], dias_laborables: int = DIAS_LABORABLES_POR_DEFECTO
) -> Tuple[EstadoDia, ...]:
    """Días hábiles trabajados, feriados marcados y fin de semana ausente."""
    semana = []
    for indice, fecha in enumerate(fechas):
        if indice >= dias_laborables:
            semana.append(EstadoDia.AUSENTE)
        elif es_feriado_venezolano(fecha):
            semana.append(EstadoDia.FERIADO)
        else:
            semana.append(EstadoDia.TRABAJADO)
    return tuple(semana)


def asistencia_por_defecto(
    empleados: Iterable[Empleado], referencia: Optional[date] = None
) -> Dict[str, Tuple[EstadoDia, ...]]:
    semana = semana_por_defecto(fechas_semana(referencia))
    return {empleado.id: semana for empleado in empleados}


def normalizar_asistencia(secuencia: Optional[Iterable[Any]]) -> Tuple[EstadoDia, ...]:
    """
    Siempre 7 marcas. Las que faltan cuentan como ausencia; más de 7 es un
    error del registro.
    """
    marcas = [convertir_enum(EstadoDia, m) for m in (secuencia or ())]
    if len(marcas) > DIAS_POR_SEMANA:
        raise ErrorValidacion(
            f"La asistencia semanal admite {DIAS_POR_SEMANA} marcas (recibidas: {len(marcas)})."
        )
    marcas.extend([EstadoDia.AUSENTE] * (DIAS_POR_SEMANA - len(marcas)))
    return tuple(marcas)


def alternar_dia(registro: Optional[Iterable[Any]], indice: int) -> Tuple[EstadoDia, ...]:
    if not 0 <= indice < DIAS_POR_SEMANA:
        raise ErrorValidacion(f"Índice de día fuera de rango: {indice}")
    marcas = list(normalizar_asistencia(registro))
    marcas[indice] = _SIGUIENTE_ESTADO[marcas[indice]]
    return tuple(marcas)


def ajustar_horas_extra(actual: float, delta: float) -> float:
    return max(0, (actual or 0) + delta)
