# -*- coding: utf-8 -*-
"""
==============================================================================
=== MOTOR DE CÁLCULO DEL CICLO DE NÓMINA ===
==============================================================================

Convierte la asistencia, horas extra, bonos, préstamos y penalizaciones de la
plantilla en el pago de cada empleado para un ciclo semanal o quincenal.
Los empleados que egresan (despido o renuncia) cobran su liquidación.

Este archivo contiene solo lógica pura: no hace E/S ni modifica los datos que
recibe. Con finalizar=True devuelve, además, una copia nueva de los libros de
préstamos y penalizaciones con las cuotas del ciclo descontadas; el
anfitrión la persiste de forma atómica o la descarta.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
from __future__ import annotations
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from asistencia import normalizar_asistencia
from configuracion import ParametrosCiclo, ParametrosLiquidacion
from liquidacion import calcular_liquidacion
from modelos import (
    REGLAS_POR_ESTADO,
    Empleado,
    EstadoDia,
    Penalizacion,
    Prestamo,
    ResultadoCiclo,
    ResumenFinal,
    SemanaNomina,
    TipoCiclo,
    convertir_enum,
)
from prestamos import amortizar_penalizacion, amortizar_prestamo, generar_id

_logger = logging.getLogger(__name__)

ETIQUETAS_CICLO = {
    TipoCiclo.SEMANAL: "Semana",
    TipoCiclo.QUINCENAL: "Quincena",
}


# ==============================================================================
# --- 1. FUNCIONES DE CÁLCULO DE INGRESOS ---
# ==============================================================================

def calcular_tarifa_diaria(salario_base_semanal: float, parametros: ParametrosCiclo) -> float:
    """Valor de un día hábil: salario semanal entre los días laborables."""
    return salario_base_semanal / parametros.dias_laborables


def calcular_base_teorica(salario_base_semanal: float, tipo_ciclo: Any, parametros: ParametrosCiclo) -> float:
    """
    Base del ciclo. La quincena usa un multiplicador fijo aproximado
    (2.14 semanas) en lugar de contar los días reales.
    """
    tipo_ciclo = convertir_enum(TipoCiclo, tipo_ciclo)
    if tipo_ciclo is TipoCiclo.QUINCENAL:
        return salario_base_semanal * parametros.multiplicador_quincenal
    return salario_base_semanal


def contar_asistencia(marcas: Sequence[Any], dias_laborables: int) -> Tuple[int, int, int]:
    """
    Separa la semana en días hábiles y de descanso.
    Acepta marcas crudas ('worked', ...); se normalizan a 7 días.
    Devuelve: (días trabajados, feriados trabajados, días de descanso trabajados)
    """
    marcas = normalizar_asistencia(marcas)
    habiles = marcas[:dias_laborables]
    descanso = marcas[dias_laborables:]

    dias_trabajados = sum(1 for m in habiles if m is EstadoDia.TRABAJADO)
    feriados_trabajados = sum(1 for m in habiles if m is EstadoDia.FERIADO)
    descanso_trabajados = sum(1 for m in descanso if m in (EstadoDia.TRABAJADO, EstadoDia.FERIADO))

    return dias_trabajados, feriados_trabajados, descanso_trabajados


# ==============================================================================
# --- 2. CÁLCULO POR EMPLEADO ---
# ==============================================================================

def calcular_resumen_empleado(
    empleado: Empleado,
    marcas: Sequence[Any],
    horas_extra: float,
    prestamo: Optional[Prestamo],
    penalizaciones: Sequence[Penalizacion],
    tipo_ciclo: Any,
    parametros: ParametrosCiclo,
    parametros_liquidacion: Optional[ParametrosLiquidacion] = None,
    fecha_referencia: Optional[date] = None,
) -> ResumenFinal:
    """
    Pago de un empleado en el ciclo. 'prestamo' y 'penalizaciones' son los
    registros vigentes del empleado; solo se descuentan si su estado lo
    permite.
    """
    marcas = normalizar_asistencia(marcas)
    regla = REGLAS_POR_ESTADO[empleado.estado]

    # --- 1. Ingresos del ciclo ---
    base_teorica = calcular_base_teorica(empleado.salario_base_semanal, tipo_ciclo, parametros)
    tarifa_diaria = calcular_tarifa_diaria(empleado.salario_base_semanal, parametros)

    dias_trabajados, feriados_trabajados, descanso_trabajados = contar_asistencia(
        marcas, parametros.dias_laborables
    )
    dias_ausente = parametros.dias_laborables - (dias_trabajados + feriados_trabajados)

    monto_dias_no_pagados = max(0, dias_ausente) * tarifa_diaria
    pago_extra_feriados = (
        feriados_trabajados + descanso_trabajados * parametros.multiplicador_fin_de_semana
    ) * tarifa_diaria
    pago_horas_extra = horas_extra * parametros.tarifa_por_hora_extra(tarifa_diaria)

    pago_base = base_teorica - monto_dias_no_pagados + pago_extra_feriados if regla.cobra_base else 0
    bono = empleado.bono_semanal if regla.cobra_bono else 0

    # --- 2. Liquidación (egresos) ---
    liquidacion = None
    if regla.liquida:
        liquidacion = calcular_liquidacion(
            empleado.salario_base_semanal,
            empleado.fecha_ingreso,
            empleado.estado,
            pago_base,
            fecha_referencia=fecha_referencia,
            parametros=parametros_liquidacion,
        )

    # --- 3. Deducciones ---
    descuento_prestamo = 0.0
    descuento_penalizacion = 0.0
    if regla.aplica_deducciones:
        if prestamo is not None:
            descuento_prestamo = prestamo.cuota_semanal
        descuento_penalizacion = sum(p.cuota_semanal for p in penalizaciones)

    # --- 4. Total ---
    if liquidacion is not None:
        total = liquidacion.total
    elif not regla.cobra_base:
        total = 0
    else:
        total = pago_base + pago_horas_extra + bono - descuento_prestamo - descuento_penalizacion

    _logger.debug(
        "Empleado %s (%s): base=%.2f extras=%.2f bono=%.2f total=%.2f",
        empleado.id, empleado.estado.value, pago_base, pago_horas_extra, bono, total,
    )

    return ResumenFinal(
        empleado_id=empleado.id,
        nombre=empleado.nombre_completo,
        departamento=empleado.nombre_departamento,
        pago_base=pago_base,
        base_teorica=base_teorica,
        monto_dias_no_pagados=monto_dias_no_pagados,
        pago_extra_feriados=pago_extra_feriados,
        cantidad_horas_extra=horas_extra,
        pago_horas_extra=pago_horas_extra,
        bono=bono,
        dias_trabajados=dias_trabajados,
        feriados_trabajados=feriados_trabajados + descanso_trabajados,
        dias_fin_de_semana_trabajados=descanso_trabajados,
        descuento_prestamo=descuento_prestamo if descuento_prestamo > 0 else None,
        descuento_penalizacion=descuento_penalizacion if descuento_penalizacion > 0 else None,
        liquidacion=liquidacion,
        asistencia_diaria=tuple(marcas),
        # Un ciclo nunca deja al trabajador debiendo a la empresa
        total=max(0, total),
    )


# ==============================================================================
# --- 3. FUNCIÓN PRINCIPAL DEL CICLO ---
# ==============================================================================

def calcular_ciclo(
    empleados: Iterable[Empleado],
    asistencia: Optional[Mapping[str, Sequence[Any]]],
    horas_extra: Optional[Mapping[str, float]],
    prestamos: Iterable[Prestamo],
    penalizaciones: Iterable[Penalizacion],
    tipo_ciclo: Any = TipoCiclo.SEMANAL,
    finalizar: bool = False,
    ciclos_previos: int = 0,
    parametros: Optional[ParametrosCiclo] = None,
    parametros_liquidacion: Optional[ParametrosLiquidacion] = None,
    fecha_referencia: Optional[date] = None,
    ahora: Optional[datetime] = None,
) -> ResultadoCiclo:
    """
    Calcula la nómina del ciclo para toda la plantilla.

    Con finalizar=False es una vista previa sin efectos: los libros devueltos
    son iguales a los recibidos y puede llamarse las veces que se quiera.
    Con finalizar=True se descuenta una semana del primer préstamo vigente y
    de todas las penalizaciones vigentes de cada empleado activo. Evitar
    cerrar dos veces el mismo ciclo es responsabilidad del anfitrión.
    """
    tipo_ciclo = convertir_enum(TipoCiclo, tipo_ciclo)
    parametros = parametros or ParametrosCiclo()
    asistencia = asistencia or {}
    horas_extra = horas_extra or {}

    libro_prestamos: List[Prestamo] = list(prestamos)
    libro_penalizaciones: List[Penalizacion] = list(penalizaciones)
    resumenes: List[ResumenFinal] = []

    for empleado in empleados:
        if empleado.id not in asistencia:
            _logger.warning("Sin asistencia para %s; se asume semana ausente.", empleado.id)
        marcas = normalizar_asistencia(asistencia.get(empleado.id))

        regla = REGLAS_POR_ESTADO[empleado.estado]
        indice_prestamo = None
        indices_penalizaciones: List[int] = []
        if regla.aplica_deducciones:
            indice_prestamo = next(
                (i for i, p in enumerate(libro_prestamos) if p.empleado_id == empleado.id and p.vigente),
                None,
            )
            indices_penalizaciones = [
                i for i, p in enumerate(libro_penalizaciones) if p.empleado_id == empleado.id and p.vigente
            ]

        resumen = calcular_resumen_empleado(
            empleado,
            marcas,
            horas_extra.get(empleado.id, 0) or 0,
            libro_prestamos[indice_prestamo] if indice_prestamo is not None else None,
            [libro_penalizaciones[i] for i in indices_penalizaciones],
            tipo_ciclo,
            parametros,
            parametros_liquidacion=parametros_liquidacion,
            fecha_referencia=fecha_referencia,
        )
        resumenes.append(resumen)

        if finalizar:
            if indice_prestamo is not None:
                libro_prestamos[indice_prestamo] = amortizar_prestamo(libro_prestamos[indice_prestamo])
            for i in indices_penalizaciones:
                libro_penalizaciones[i] = amortizar_penalizacion(libro_penalizaciones[i])

    semana = SemanaNomina(
        id=generar_id(),
        fecha=ahora or datetime.now(),
        etiqueta=f"{ETIQUETAS_CICLO[tipo_ciclo]} {ciclos_previos + 1}",
        tipo=tipo_ciclo,
        resumenes=tuple(resumenes),
        desembolso_total=sum(r.total for r in resumenes),
        version_formulas=parametros.version,
    )

    if finalizar:
        _logger.info(
            "Ciclo '%s' cerrado: %s empleados, desembolso total %.2f",
            semana.etiqueta, len(resumenes), semana.desembolso_total,
        )

    return ResultadoCiclo(
        semana=semana,
        prestamos_actualizados=tuple(libro_prestamos),
        penalizaciones_actualizadas=tuple(libro_penalizaciones),
    )


def resumenes_por_empleado(semana: SemanaNomina) -> Dict[str, ResumenFinal]:
    return {r.empleado_id: r for r in semana.resumenes}
