# -*- coding: utf-8 -*-
"""
==============================================================================
=== MODELOS DE DATOS DE LA NÓMINA ===
==============================================================================

Clases de datos (dataclasses) que intercambian el motor de cálculo y la
aplicación anfitriona: empleados, préstamos, penalizaciones y los resúmenes
que produce cada ciclo de nómina.

Los registros son inmutables (frozen). Cualquier cambio de estado produce una
copia nueva con dataclasses.replace, de modo que el anfitrión decide si
persiste o descarta el resultado.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ErrorValidacion(ValueError):
    """Dato de entrada rechazado en la frontera del sistema."""


# ==============================================================================
# --- 1. ENUMERACIONES ---
# ==============================================================================

class EstadoEmpleado(Enum):
    ACTIVO = "Activo"
    SUSPENDIDO = "Suspendido"
    DESPEDIDO = "Despedido"
    RENUNCIO = "Renunció"


class EstadoDia(Enum):
    TRABAJADO = "worked"
    AUSENTE = "absent"
    FERIADO = "holiday"
    JUSTIFICADO = "excused"


class TipoCiclo(Enum):
    SEMANAL = "semanal"
    QUINCENAL = "quincenal"


class EstadoPrestamo(Enum):
    ACTIVO = "active"
    PAGADO = "paid"
    CANCELADO = "cancelled"


class EstadoPenalizacion(Enum):
    ACTIVA = "active"
    SALDADA = "cleared"


class CategoriaPenalizacion(Enum):
    PUNTUALIDAD = "Puntualidad"
    ABANDONO = "Abandono"
    DESCUIDO_FISICO = "Descuido Físico"
    CONSUMO = "Consumo"
    DISCIPLINA = "Disciplina"


def convertir_enum(tipo: type, valor: Any) -> Any:
    """Convierte un valor crudo (str) al miembro de la enumeración indicada."""
    if isinstance(valor, tipo):
        return valor
    try:
        return tipo(valor)
    except ValueError:
        validos = ", ".join(repr(m.value) for m in tipo)
        raise ErrorValidacion(
            f"Valor {valor!r} no reconocido para {tipo.__name__}. Valores válidos: {validos}."
        ) from None


def convertir_fecha(valor: Any) -> date:
    """Acepta date, datetime o una cadena ISO ('2021-03-15')."""
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if isinstance(valor, str):
        try:
            return date.fromisoformat(valor[:10])
        except ValueError:
            raise ErrorValidacion(f"Fecha inválida: {valor!r}") from None
    raise ErrorValidacion(f"Fecha inválida: {valor!r}")


# ==============================================================================
# --- 2. REGLAS POR ESTADO DEL EMPLEADO ---
# ==============================================================================
# Qué conceptos aplican a cada estado; el motor y la liquidación leen de aquí.

@dataclass(frozen=True)
class ReglaEstado:
    cobra_base: bool
    cobra_bono: bool
    aplica_deducciones: bool
    liquida: bool
    indemniza: bool


REGLAS_POR_ESTADO: Dict[EstadoEmpleado, ReglaEstado] = {
    EstadoEmpleado.ACTIVO: ReglaEstado(
        cobra_base=True, cobra_bono=True, aplica_deducciones=True, liquida=False, indemniza=False
    ),
    EstadoEmpleado.SUSPENDIDO: ReglaEstado(
        cobra_base=False, cobra_bono=False, aplica_deducciones=False, liquida=False, indemniza=False
    ),
    # Art. 92 LOTTT: solo el despido injustificado genera indemnización
    EstadoEmpleado.DESPEDIDO: ReglaEstado(
        cobra_base=True, cobra_bono=True, aplica_deducciones=False, liquida=True, indemniza=True
    ),
    EstadoEmpleado.RENUNCIO: ReglaEstado(
        cobra_base=True, cobra_bono=True, aplica_deducciones=False, liquida=True, indemniza=False
    ),
}


# ==============================================================================
# --- 3. REGISTROS DE ENTRADA ---
# ==============================================================================

@dataclass(frozen=True)
class Empleado:
    """Ficha del empleado tal como la entrega la plantilla."""
    id: str
    nombre_completo: str
    salario_base_semanal: float
    fecha_ingreso: date
    cargo: str = ""
    departamento_id: str = ""
    departamento: Optional[str] = None
    bono_semanal: float = 0.0
    estado: EstadoEmpleado = EstadoEmpleado.ACTIVO
    frecuencia_pago: TipoCiclo = TipoCiclo.SEMANAL
    suspendido_hasta: Optional[date] = None
    email: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "fecha_ingreso", convertir_fecha(self.fecha_ingreso))
        object.__setattr__(self, "estado", convertir_enum(EstadoEmpleado, self.estado))
        object.__setattr__(self, "frecuencia_pago", convertir_enum(TipoCiclo, self.frecuencia_pago))
        if self.suspendido_hasta is not None:
            object.__setattr__(self, "suspendido_hasta", convertir_fecha(self.suspendido_hasta))

    @property
    def nombre_departamento(self) -> str:
        return self.departamento or self.departamento_id


@dataclass(frozen=True)
class Prestamo:
    id: str
    empleado_id: str
    monto: float
    semanas_totales: int
    semanas_restantes: int
    cuota_semanal: float
    fecha_solicitud: Optional[date] = None
    estado: EstadoPrestamo = EstadoPrestamo.ACTIVO
    notas: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "estado", convertir_enum(EstadoPrestamo, self.estado))

    @property
    def vigente(self) -> bool:
        return self.estado is EstadoPrestamo.ACTIVO and self.semanas_restantes > 0


@dataclass(frozen=True)
class Penalizacion:
    id: str
    empleado_id: str
    categoria: CategoriaPenalizacion
    motivo: str
    monto: float
    semanas_totales: int
    semanas_restantes: int
    cuota_semanal: float
    fecha_creacion: Optional[date] = None
    estado: EstadoPenalizacion = EstadoPenalizacion.ACTIVA

    def __post_init__(self):
        object.__setattr__(self, "categoria", convertir_enum(CategoriaPenalizacion, self.categoria))
        object.__setattr__(self, "estado", convertir_enum(EstadoPenalizacion, self.estado))

    @property
    def vigente(self) -> bool:
        return self.estado is EstadoPenalizacion.ACTIVA and self.semanas_restantes > 0


# ==============================================================================
# --- 4. RESULTADOS ---
# ==============================================================================

@dataclass(frozen=True)
class DetallesLiquidacion:
    """Liquidación de un empleado que egresa (montos sin redondear)."""
    semanas_adeudadas: float
    prestaciones: float
    vacaciones: float
    utilidades: float
    indemnizacion: float
    total: float
    # Cifras intermedias para auditoría
    salario_integral_diario: float = 0.0
    dias_prestaciones: float = 0.0
    dias_vacaciones: float = 0.0
    dias_bono_vacacional: float = 0.0
    dias_utilidades: float = 0.0
    dias_indemnizacion: float = 0.0
    antiguedad_anios: int = 0
    antiguedad_meses: int = 0
    antiguedad_dias: int = 0


@dataclass(frozen=True)
class ResumenFinal:
    """Pago de un empleado en un ciclo cerrado."""
    empleado_id: str
    nombre: str
    departamento: str
    pago_base: float
    base_teorica: float
    monto_dias_no_pagados: float
    pago_extra_feriados: float
    cantidad_horas_extra: float
    pago_horas_extra: float
    bono: float
    dias_trabajados: int
    feriados_trabajados: int
    dias_fin_de_semana_trabajados: int
    total: float
    descuento_prestamo: Optional[float] = None
    descuento_penalizacion: Optional[float] = None
    liquidacion: Optional[DetallesLiquidacion] = None
    asistencia_diaria: Tuple[EstadoDia, ...] = ()


@dataclass(frozen=True)
class SemanaNomina:
    id: str
    fecha: datetime
    etiqueta: str
    tipo: TipoCiclo
    resumenes: Tuple[ResumenFinal, ...]
    desembolso_total: float
    version_formulas: str = ""

    def a_dict(self) -> Dict[str, Any]:
        """Representación serializable para el almacén de historial."""
        return _serializable(asdict(self))


@dataclass(frozen=True)
class ResultadoCiclo:
    semana: SemanaNomina
    prestamos_actualizados: Tuple[Prestamo, ...] = field(default_factory=tuple)
    penalizaciones_actualizadas: Tuple[Penalizacion, ...] = field(default_factory=tuple)


def _serializable(valor: Any) -> Any:
    if isinstance(valor, Enum):
        return valor.value
    if isinstance(valor, (date, datetime)):
        return valor.isoformat()
    if isinstance(valor, dict):
        return {k: _serializable(v) for k, v in valor.items()}
    if isinstance(valor, (list, tuple)):
        return [_serializable(v) for v in valor]
    return valor
