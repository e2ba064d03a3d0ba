# -*- coding: utf-8 -*-
"""
==============================================================================
=== REPORTES DE NÓMINA (PANDAS) ===
==============================================================================

Tablas de resumen para la capa de presentación: desglose del ciclo, evolución
del historial, indicadores del tablero y ranking de méritos. El redondeo a
unidades de moneda ocurre solo en formatear_moneda.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

import pandas as pd

from configuracion import ParametrosCiclo
from modelos import (
    Empleado,
    EstadoEmpleado,
    EstadoPenalizacion,
    EstadoPrestamo,
    Penalizacion,
    Prestamo,
    SemanaNomina,
    TipoCiclo,
)
from motor import calcular_ciclo

COLUMNAS_RESUMEN = [
    'empleado_id', 'nombre', 'departamento', 'base_teorica', 'monto_dias_no_pagados',
    'pago_extra_feriados', 'pago_base', 'cantidad_horas_extra', 'pago_horas_extra', 'bono',
    'descuento_prestamo', 'descuento_penalizacion', 'liquidacion', 'dias_trabajados',
    'feriados_trabajados', 'total',
]

# (puntaje mínimo, categoría), de mayor a menor
CATEGORIAS_MERITO = [
    (90, 'Elite'),
    (75, 'Destacado'),
    (0, 'Regular'),
]


def formatear_moneda(monto: float) -> str:
    """
    Formato de presentación en dólares sin decimales: 1234.6 -> '$1,235'.
    Las mitades se alejan de cero (2.5 -> '$3').
    """
    signo = "-" if monto < 0 else ""
    unidades = Decimal(str(abs(monto))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{signo}${unidades:,}"


# ==============================================================================
# --- 1. DESGLOSE DEL CICLO ---
# ==============================================================================

def resumenes_a_dataframe(semana: SemanaNomina) -> pd.DataFrame:
    """Una fila por empleado; las deducciones ausentes valen 0."""
    filas = []
    for r in semana.resumenes:
        filas.append({
            'empleado_id': r.empleado_id,
            'nombre': r.nombre,
            'departamento': r.departamento,
            'base_teorica': r.base_teorica,
            'monto_dias_no_pagados': r.monto_dias_no_pagados,
            'pago_extra_feriados': r.pago_extra_feriados,
            'pago_base': r.pago_base,
            'cantidad_horas_extra': r.cantidad_horas_extra,
            'pago_horas_extra': r.pago_horas_extra,
            'bono': r.bono,
            'descuento_prestamo': r.descuento_prestamo or 0.0,
            'descuento_penalizacion': r.descuento_penalizacion or 0.0,
            'liquidacion': r.liquidacion.total if r.liquidacion else 0.0,
            'dias_trabajados': r.dias_trabajados,
            'feriados_trabajados': r.feriados_trabajados,
            'total': r.total,
        })
    return pd.DataFrame(filas, columns=COLUMNAS_RESUMEN)


def desglose_por_departamento(semana: SemanaNomina) -> pd.Series:
    df = resumenes_a_dataframe(semana)
    return df.groupby('departamento')['total'].sum().sort_values(ascending=False)


def evolucion_historial(historial: Iterable[SemanaNomina]) -> pd.DataFrame:
    filas = [
        {
            'etiqueta': semana.etiqueta,
            'fecha': semana.fecha,
            'total': semana.desembolso_total,
            'bonos': sum(r.bono for r in semana.resumenes),
            'base': sum(r.pago_base for r in semana.resumenes),
        }
        for semana in historial
    ]
    return pd.DataFrame(filas, columns=['etiqueta', 'fecha', 'total', 'bonos', 'base'])


# ==============================================================================
# --- 2. INDICADORES DEL TABLERO ---
# ==============================================================================

def estadisticas_tablero(
    empleados: Sequence[Empleado],
    asistencia: Optional[Mapping[str, Sequence[Any]]],
    horas_extra: Optional[Mapping[str, float]],
    prestamos: Iterable[Prestamo],
    penalizaciones: Iterable[Penalizacion],
    tipo_ciclo: Any = TipoCiclo.SEMANAL,
    parametros: Optional[ParametrosCiclo] = None,
) -> Dict[str, float]:
    """
    Indicadores del ciclo en curso a partir de una vista previa (sin cerrar).
    - total: desembolso proyectado.
    - tasa_asistencia: % de días hábiles trabajados (incluye feriados).
    - tasa_rotacion: % de la plantilla despedida o renunciada.
    """
    parametros = parametros or ParametrosCiclo()
    vista = calcular_ciclo(
        empleados, asistencia, horas_extra, prestamos, penalizaciones,
        tipo_ciclo, finalizar=False, parametros=parametros,
    ).semana

    dias_habiles_trabajados = sum(
        r.dias_trabajados + (r.feriados_trabajados - r.dias_fin_de_semana_trabajados)
        for r in vista.resumenes
    )
    dias_posibles = parametros.dias_laborables * len(empleados)
    egresados = sum(
        1 for e in empleados if e.estado in (EstadoEmpleado.DESPEDIDO, EstadoEmpleado.RENUNCIO)
    )

    return {
        'total': vista.desembolso_total,
        'activos': sum(1 for e in empleados if e.estado is EstadoEmpleado.ACTIVO),
        'tasa_asistencia': (dias_habiles_trabajados / dias_posibles) * 100 if dias_posibles > 0 else 0.0,
        'tasa_rotacion': (egresados / (len(empleados) or 1)) * 100,
    }


def _categoria_merito(puntaje: float) -> str:
    for minimo, categoria in CATEGORIAS_MERITO:
        if puntaje >= minimo:
            return categoria
    return CATEGORIAS_MERITO[-1][1]


def ranking_meritos(
    empleados: Iterable[Empleado],
    historial: Sequence[SemanaNomina],
    prestamos: Iterable[Prestamo],
    penalizaciones: Iterable[Penalizacion],
    parametros: Optional[ParametrosCiclo] = None,
) -> pd.DataFrame:
    """
    Puntaje = 70% de la asistencia histórica + 20 sin penalizaciones activas
    + 10 sin préstamos activos (máximo 100).
    """
    parametros = parametros or ParametrosCiclo()
    prestamos = list(prestamos)
    penalizaciones = list(penalizaciones)
    dias_posibles = max(1, len(historial) * parametros.dias_laborables)

    filas = []
    for empleado in empleados:
        dias = 0
        for semana in historial:
            for r in semana.resumenes:
                if r.empleado_id == empleado.id:
                    habiles = r.dias_trabajados + (r.feriados_trabajados - r.dias_fin_de_semana_trabajados)
                    dias += min(parametros.dias_laborables, habiles)

        tasa_asistencia = (dias / dias_posibles) * 100
        sin_penalizaciones = not any(
            p.empleado_id == empleado.id and p.estado is EstadoPenalizacion.ACTIVA for p in penalizaciones
        )
        sin_prestamos = not any(
            p.empleado_id == empleado.id and p.estado is EstadoPrestamo.ACTIVO for p in prestamos
        )

        puntaje = tasa_asistencia * 0.7
        if sin_penalizaciones:
            puntaje += 20
        if sin_prestamos:
            puntaje += 10
        puntaje = min(100, puntaje)

        filas.append({
            'empleado_id': empleado.id,
            'nombre': empleado.nombre_completo,
            'tasa_asistencia': tasa_asistencia,
            'puntaje': puntaje,
            'sin_penalizaciones': sin_penalizaciones,
            'sin_prestamos': sin_prestamos,
            'categoria': _categoria_merito(puntaje),
        })

    columnas = ['empleado_id', 'nombre', 'tasa_asistencia', 'puntaje',
                'sin_penalizaciones', 'sin_prestamos', 'categoria']
    df = pd.DataFrame(filas, columns=columnas)
    return df.sort_values('puntaje', ascending=False, kind='stable').reset_index(drop=True)
