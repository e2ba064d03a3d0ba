# -*- coding: utf-8 -*-
"""
Libro de préstamos y penalizaciones.

Creación validada de registros y amortización por ciclo. Las funciones de
amortización devuelven un registro nuevo; el original no se modifica.
"""

from __future__ import annotations
import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Any, Iterable, List, Optional, Union

from modelos import (
    CategoriaPenalizacion,
    ErrorValidacion,
    EstadoPenalizacion,
    EstadoPrestamo,
    Penalizacion,
    Prestamo,
    convertir_enum,
)

_logger = logging.getLogger(__name__)

# Motivo estándar por categoría del reglamento interno
CATEGORIAS_PENALIZACION = {
    CategoriaPenalizacion.PUNTUALIDAD: "Llegar después de la 1:00 PM (Hora de preparación).",
    CategoriaPenalizacion.ABANDONO: "Irse antes del cierre (10 PM / 12 AM) sin permiso.",
    CategoriaPenalizacion.DESCUIDO_FISICO: "Dañar mobiliario o equipo por descuido.",
    CategoriaPenalizacion.CONSUMO: "Comer o jugar sin pagar/registrar (Autodescuento).",
    CategoriaPenalizacion.DISCIPLINA: "Uso de celular atendiendo clientes o mala higiene.",
}

RegistroCuotas = Union[Prestamo, Penalizacion]


def generar_id() -> str:
    return uuid.uuid4().hex[:9]


def _validar_monto_y_semanas(monto: float, semanas: int) -> None:
    if monto is None or monto <= 0:
        raise ErrorValidacion(f"El monto debe ser mayor a cero (recibido: {monto}).")
    if not isinstance(semanas, int) or isinstance(semanas, bool) or semanas <= 0:
        raise ErrorValidacion(f"Las semanas deben ser un entero mayor a cero (recibido: {semanas!r}).")


# --- Creación ---

def crear_prestamo(
    empleado_id: str,
    monto: float,
    semanas: int,
    fecha: Optional[date] = None,
    notas: Optional[str] = None,
) -> Prestamo:
    """Préstamo activo con cuota fija = monto / semanas."""
    _validar_monto_y_semanas(monto, semanas)
    prestamo = Prestamo(
        id=generar_id(),
        empleado_id=empleado_id,
        monto=monto,
        semanas_totales=semanas,
        semanas_restantes=semanas,
        cuota_semanal=monto / semanas,
        fecha_solicitud=fecha or date.today(),
        notas=notas,
    )
    _logger.info("Préstamo %s creado para %s: %.2f en %s semanas", prestamo.id, empleado_id, monto, semanas)
    return prestamo


def crear_penalizacion(
    empleado_id: str,
    categoria: Any,
    monto: float,
    semanas: int = 1,
    motivo: Optional[str] = None,
    fecha: Optional[date] = None,
) -> Penalizacion:
    _validar_monto_y_semanas(monto, semanas)
    categoria = convertir_enum(CategoriaPenalizacion, categoria)
    penalizacion = Penalizacion(
        id=generar_id(),
        empleado_id=empleado_id,
        categoria=categoria,
        motivo=motivo or CATEGORIAS_PENALIZACION[categoria],
        monto=monto,
        semanas_totales=semanas,
        semanas_restantes=semanas,
        cuota_semanal=monto / semanas,
        fecha_creacion=fecha or date.today(),
    )
    _logger.info("Penalización %s (%s) aplicada a %s", penalizacion.id, categoria.value, empleado_id)
    return penalizacion


def cancelar_prestamo(prestamo: Prestamo) -> Prestamo:
    if prestamo.estado is not EstadoPrestamo.ACTIVO:
        raise ErrorValidacion(f"Solo se pueden cancelar préstamos activos (estado: {prestamo.estado.value}).")
    return replace(prestamo, estado=EstadoPrestamo.CANCELADO)


# --- Amortización por ciclo ---

def _exigir_vigente(registro: RegistroCuotas) -> None:
    if not registro.vigente:
        raise ErrorValidacion(
            f"El registro {registro.id} no tiene cuotas pendientes "
            f"(estado: {registro.estado.value}, semanas restantes: {registro.semanas_restantes})."
        )


def amortizar_prestamo(prestamo: Prestamo) -> Prestamo:
    """Descuenta una cuota; al llegar a cero semanas pasa a 'paid'."""
    _exigir_vigente(prestamo)
    restantes = prestamo.semanas_restantes - 1
    estado = EstadoPrestamo.PAGADO if restantes == 0 else prestamo.estado
    return replace(prestamo, semanas_restantes=restantes, estado=estado)


def amortizar_penalizacion(penalizacion: Penalizacion) -> Penalizacion:
    """Descuenta una cuota; al llegar a cero semanas pasa a 'cleared'."""
    _exigir_vigente(penalizacion)
    restantes = penalizacion.semanas_restantes - 1
    estado = EstadoPenalizacion.SALDADA if restantes == 0 else penalizacion.estado
    return replace(penalizacion, semanas_restantes=restantes, estado=estado)


# --- Consultas ---

def prestamo_vigente(prestamos: Iterable[Prestamo], empleado_id: str) -> Optional[Prestamo]:
    """Primer préstamo activo con semanas pendientes (orden del libro)."""
    for prestamo in prestamos:
        if prestamo.empleado_id == empleado_id and prestamo.vigente:
            return prestamo
    return None


def penalizaciones_vigentes(penalizaciones: Iterable[Penalizacion], empleado_id: str) -> List[Penalizacion]:
    return [p for p in penalizaciones if p.empleado_id == empleado_id and p.vigente]


def saldo_pendiente(registro: RegistroCuotas) -> float:
    return registro.semanas_restantes * registro.cuota_semanal


def deuda_activa_total(registros: Iterable[RegistroCuotas]) -> float:
    return sum(saldo_pendiente(r) for r in registros if r.vigente)
