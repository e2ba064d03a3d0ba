# -*- coding: utf-8 -*-
"""
Cálculo de antigüedad (años, meses y días) entre la fecha de ingreso y una
fecha de referencia, con la resta civil de calendario: primero componente a
componente y luego un préstamo de días y uno de meses.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from modelos import convertir_fecha


@dataclass(frozen=True)
class Antiguedad:
    anios: int
    meses: int
    dias: int

    @property
    def total_meses(self) -> int:
        return self.anios * 12 + self.meses

    @property
    def dias_aproximados(self) -> int:
        """Días de servicio con años de 365 y meses de 30 días."""
        return self.anios * 365 + self.meses * 30 + self.dias

    def como_relativedelta(self) -> relativedelta:
        return relativedelta(years=self.anios, months=self.meses, days=self.dias)


def _dias_del_mes_anterior(fecha: date) -> int:
    """Cantidad de días del mes inmediatamente anterior al de 'fecha'."""
    ultimo_dia_mes_anterior = fecha.replace(day=1) - relativedelta(days=1)
    return ultimo_dia_mes_anterior.day


def calcular_antiguedad(fecha_ingreso: Any, fecha_referencia: Optional[Any] = None) -> Antiguedad:
    """
    Antigüedad del trabajador a la fecha de referencia (hoy por defecto).

    Los días faltantes se toman prestados del mes anterior al de la fecha de
    referencia. Una fecha de ingreso futura no se trata de forma especial.
    """
    inicio = convertir_fecha(fecha_ingreso)
    fin = convertir_fecha(fecha_referencia) if fecha_referencia is not None else date.today()

    anios = fin.year - inicio.year
    meses = fin.month - inicio.month
    dias = fin.day - inicio.day

    if dias < 0:
        meses -= 1
        dias += _dias_del_mes_anterior(fin)
    if meses < 0:
        anios -= 1
        meses += 12

    return Antiguedad(anios=anios, meses=meses, dias=dias)
