# -*- coding: utf-8 -*-
"""
==============================================================================
=== MOTOR DE LIQUIDACIÓN (PRESTACIONES SOCIALES LOTTT) ===
==============================================================================

Cálculo de la liquidación de un trabajador que egresa por despido o renuncia:
prestaciones sociales, vacaciones y bono vacacional, utilidades e
indemnización por despido injustificado. Todos los conceptos se pagan sobre
el SALARIO INTEGRAL diario.

Lógica pura: no hay E/S y los montos se devuelven sin redondear.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
from __future__ import annotations
import logging
from datetime import date
from typing import Any, Iterable, Optional, Tuple

from antiguedad import Antiguedad, calcular_antiguedad
from configuracion import (
    DIAS_BONO_VACACIONAL_ADICIONALES_MAX,
    DIAS_BONO_VACACIONAL_BASE,
    DIAS_INDEMNIZACION_POR_ANIO_ADICIONAL,
    DIAS_INDEMNIZACION_PRIMER_ANIO,
    DIAS_POR_ANIO,
    DIAS_POR_MES,
    DIAS_PRESTACIONES_MINIMO_POR_ANIO,
    DIAS_PRESTACIONES_POR_MES_PRIMER_ANIO,
    DIAS_PRESTACIONES_POR_MES_SIGUIENTES,
    DIAS_PRESTACIONES_PRIMER_ANIO,
    DIAS_UTILIDADES_POR_DEFECTO,
    DIAS_VACACIONES_ADICIONALES_MAX,
    DIAS_VACACIONES_BASE,
    SEMANAS_POR_MES,
    TRAMOS_INDEMNIZACION,
    ParametrosLiquidacion,
)
from modelos import (
    REGLAS_POR_ESTADO,
    DetallesLiquidacion,
    Empleado,
    EstadoEmpleado,
    convertir_enum,
)

_logger = logging.getLogger(__name__)


# ==============================================================================
# --- 1. SALARIO INTEGRAL ---
# ==============================================================================

def salario_integral_diario(salario_base_semanal: float, dias_utilidades_por_anio: float) -> float:
    """
    Salario Integral = salario diario + alícuota de utilidades + alícuota de
    bono vacacional (mínimo 7 días). Las alícuotas se prorratean en 30 días.
    """
    salario_diario_base = salario_base_semanal / 7
    alicuota_utilidades = (salario_base_semanal * SEMANAS_POR_MES * dias_utilidades_por_anio) / DIAS_POR_ANIO
    alicuota_bono_vacacional = (salario_base_semanal * SEMANAS_POR_MES * DIAS_BONO_VACACIONAL_BASE) / DIAS_POR_ANIO

    return salario_diario_base + alicuota_utilidades / DIAS_POR_MES + alicuota_bono_vacacional / DIAS_POR_MES


# ==============================================================================
# --- 2. DÍAS POR CONCEPTO ---
# ==============================================================================

def dias_prestaciones(antiguedad: Antiguedad) -> float:
    """
    Prestaciones sociales (Art. 141-142 LOTTT).
    - Primer año: 5 días por mes (60 días al completarlo).
    - Desde el segundo año: 2 días por mes adicional.
    - Garantía mínima: 30 días por año completo.
    """
    total_meses = antiguedad.total_meses
    if total_meses <= 12:
        dias = total_meses * DIAS_PRESTACIONES_POR_MES_PRIMER_ANIO
    else:
        dias = DIAS_PRESTACIONES_PRIMER_ANIO + (total_meses - 12) * DIAS_PRESTACIONES_POR_MES_SIGUIENTES

    return max(dias, antiguedad.anios * DIAS_PRESTACIONES_MINIMO_POR_ANIO)


def _dias_vacaciones_del_anio(indice_anio: int, dias_base: Optional[float]) -> float:
    if dias_base is not None:
        return dias_base
    return DIAS_VACACIONES_BASE + min(indice_anio, DIAS_VACACIONES_ADICIONALES_MAX)


def _dias_bono_del_anio(indice_anio: int) -> float:
    return DIAS_BONO_VACACIONAL_BASE + min(indice_anio, DIAS_BONO_VACACIONAL_ADICIONALES_MAX)


def dias_vacaciones(antiguedad: Antiguedad, dias_base: Optional[float] = None) -> Tuple[float, float]:
    """
    Vacaciones vencidas y fraccionadas (Art. 190-196 LOTTT).
    Devuelve: (días de vacaciones, días de bono vacacional)
    """
    total_vacaciones = 0.0
    total_bono = 0.0

    for i in range(antiguedad.anios):
        total_vacaciones += _dias_vacaciones_del_anio(i, dias_base)
        total_bono += _dias_bono_del_anio(i)

    # Fracción del año en curso
    fraccion = antiguedad.meses / 12
    total_vacaciones += _dias_vacaciones_del_anio(antiguedad.anios, dias_base) * fraccion
    total_bono += _dias_bono_del_anio(antiguedad.anios) * fraccion

    return total_vacaciones, total_bono


def dias_utilidades(antiguedad: Antiguedad, dias_por_anio: float = DIAS_UTILIDADES_POR_DEFECTO) -> float:
    """Utilidades pendientes (Art. 131-140 LOTTT), con fracción del año en curso."""
    return antiguedad.anios * dias_por_anio + dias_por_anio * (antiguedad.meses / 12)


def dias_indemnizacion(antiguedad: Antiguedad) -> float:
    """
    Indemnización por despido injustificado (Art. 92 LOTTT).
    - Menos de 3 meses: 15 días.
    - Menos de 6 meses: 30 días.
    - Menos de 1 año: 45 días.
    - 1 año o más: 60 días + 30 por cada año completo adicional.
    """
    total_meses = antiguedad.total_meses
    for limite_meses, dias in TRAMOS_INDEMNIZACION:
        if total_meses < limite_meses:
            return dias

    return DIAS_INDEMNIZACION_PRIMER_ANIO + max(antiguedad.anios - 1, 0) * DIAS_INDEMNIZACION_POR_ANIO_ADICIONAL


# ==============================================================================
# --- 3. FUNCIONES PRINCIPALES ---
# ==============================================================================

def calcular_liquidacion(
    salario_base_semanal: float,
    fecha_ingreso: Any,
    estado: Any,
    pago_semana_pendiente: float,
    dias_utilidades_por_anio: Optional[float] = None,
    dias_base_vacaciones: Optional[float] = None,
    fecha_referencia: Optional[Any] = None,
    parametros: Optional[ParametrosLiquidacion] = None,
) -> Optional[DetallesLiquidacion]:
    """
    Genera la liquidación completa de un trabajador.

    Devuelve None para estados que no liquidan (Activo, Suspendido). Los
    parámetros personalizados se validan con ParametrosLiquidacion; si se
    pasa 'parametros' explícitamente, tiene prioridad.
    """
    estado = convertir_enum(EstadoEmpleado, estado)
    regla = REGLAS_POR_ESTADO[estado]
    if not regla.liquida:
        return None

    if parametros is None:
        parametros = ParametrosLiquidacion(
            dias_utilidades_por_anio=(
                dias_utilidades_por_anio if dias_utilidades_por_anio is not None else DIAS_UTILIDADES_POR_DEFECTO
            ),
            dias_base_vacaciones=dias_base_vacaciones,
        )

    # 1. Antigüedad y salario integral
    antiguedad = calcular_antiguedad(fecha_ingreso, fecha_referencia)
    integral = salario_integral_diario(salario_base_semanal, parametros.dias_utilidades_por_anio)

    # 2. Prestaciones sociales
    d_prestaciones = dias_prestaciones(antiguedad)
    prestaciones = d_prestaciones * integral

    # 3. Vacaciones + bono vacacional
    d_vacaciones, d_bono = dias_vacaciones(antiguedad, parametros.dias_base_vacaciones)
    vacaciones = (d_vacaciones + d_bono) * integral

    # 4. Utilidades
    d_utilidades = dias_utilidades(antiguedad, parametros.dias_utilidades_por_anio)
    utilidades = d_utilidades * integral

    # 5. Indemnización (solo despido)
    d_indemnizacion = dias_indemnizacion(antiguedad) if regla.indemniza else 0
    indemnizacion = d_indemnizacion * integral

    total = pago_semana_pendiente + prestaciones + vacaciones + utilidades + indemnizacion

    _logger.debug(
        "Liquidación (%s) antigüedad %sa %sm %sd: integral=%.4f total=%.4f",
        estado.value, antiguedad.anios, antiguedad.meses, antiguedad.dias, integral, total,
    )

    return DetallesLiquidacion(
        semanas_adeudadas=pago_semana_pendiente,
        prestaciones=prestaciones,
        vacaciones=vacaciones,
        utilidades=utilidades,
        indemnizacion=indemnizacion,
        total=total,
        salario_integral_diario=integral,
        dias_prestaciones=d_prestaciones,
        dias_vacaciones=d_vacaciones,
        dias_bono_vacacional=d_bono,
        dias_utilidades=d_utilidades,
        dias_indemnizacion=d_indemnizacion,
        antiguedad_anios=antiguedad.anios,
        antiguedad_meses=antiguedad.meses,
        antiguedad_dias=antiguedad.dias,
    )


def simular_liquidacion(
    empleado: Empleado,
    estado: Any = EstadoEmpleado.RENUNCIO,
    semanas_pendientes: float = 0,
    parametros: Optional[ParametrosLiquidacion] = None,
    fecha_referencia: Optional[date] = None,
) -> Optional[DetallesLiquidacion]:
    """
    Simulación de egreso para cualquier empleado, sin importar su estado
    actual. Las semanas pendientes se pagan al salario base semanal.
    """
    return calcular_liquidacion(
        empleado.salario_base_semanal,
        empleado.fecha_ingreso,
        estado,
        semanas_pendientes * empleado.salario_base_semanal,
        fecha_referencia=fecha_referencia,
        parametros=parametros,
    )


def calcular_pasivo_laboral(
    empleados: Iterable[Empleado],
    parametros: Optional[ParametrosLiquidacion] = None,
    fecha_referencia: Optional[date] = None,
) -> float:
    """Pasivo global: suma de las liquidaciones por renuncia de toda la plantilla."""
    total = 0.0
    for empleado in empleados:
        liquidacion = simular_liquidacion(
            empleado, EstadoEmpleado.RENUNCIO, parametros=parametros, fecha_referencia=fecha_referencia
        )
        total += liquidacion.total if liquidacion else 0.0
    return total
