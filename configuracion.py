# -*- coding: utf-8 -*-
"""
==============================================================================
=== PARÁMETROS LEGALES Y DE CÁLCULO ===
==============================================================================

Constantes de la LOTTT y parámetros configurables del motor. Los parámetros
se validan una sola vez al construirse; un valor fuera de rango se rechaza
con ErrorConfiguracion en lugar de ajustarse en silencio.

Los valores pueden sobrescribirse desde variables de entorno (o un archivo
.env) con los prefijos NOMINA_*. El archivo .env solo se lee al llamar a
los cargadores; importar el módulo no toca os.environ.
"""

# --- 0. IMPORTACIONES NECESARIAS ---
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional

from dotenv import find_dotenv, load_dotenv

from modelos import ErrorValidacion

_logger = logging.getLogger(__name__)


class ErrorConfiguracion(ErrorValidacion):
    """Parámetro de cálculo fuera del rango legal o mal formado."""


# ==============================================================================
# --- 1. CONSTANTES GLOBALES ---
# ==============================================================================

# Versión del conjunto de fórmulas; se registra en cada ciclo cerrado
VERSION_FORMULAS = "2025.1"

# Ciclo de pago
DIAS_POR_SEMANA = 7
DIAS_LABORABLES_POR_DEFECTO = 5
MULTIPLICADOR_QUINCENAL = 2.14  # Aproximación fija, no cuenta días reales
MULTIPLICADOR_FIN_DE_SEMANA = 2  # Trabajo en día de descanso: pago doble
TARIFA_HORA_EXTRA_FIJA = 2.0
MULTIPLICADOR_HORA_EXTRA = 1.5
HORAS_POR_JORNADA = 8
MODOS_HORA_EXTRA = ("fija", "multiplicador")

# Salario integral
SEMANAS_POR_MES = 4.33
DIAS_POR_ANIO = 365
DIAS_POR_MES = 30

# Utilidades (Art. 131-140 LOTTT): mínimo 15 días, máximo 4 meses
DIAS_UTILIDADES_POR_DEFECTO = 30
DIAS_UTILIDADES_MIN = 15
DIAS_UTILIDADES_MAX = 120

# Vacaciones (Art. 190-192 LOTTT): 15 días + 1 por año, hasta 15 adicionales
DIAS_VACACIONES_BASE = 15
DIAS_VACACIONES_ADICIONALES_MAX = 15
DIAS_VACACIONES_MIN = 15
DIAS_VACACIONES_MAX = 30

# Bono vacacional: 7 días + 1 por año, hasta 21 días
DIAS_BONO_VACACIONAL_BASE = 7
DIAS_BONO_VACACIONAL_ADICIONALES_MAX = 14

# Prestaciones sociales (Art. 141-142 LOTTT)
DIAS_PRESTACIONES_POR_MES_PRIMER_ANIO = 5
DIAS_PRESTACIONES_PRIMER_ANIO = 60
DIAS_PRESTACIONES_POR_MES_SIGUIENTES = 2
DIAS_PRESTACIONES_MINIMO_POR_ANIO = 30

# Indemnización por despido injustificado (Art. 92 LOTTT)
# (meses de antigüedad menores a, días de salario)
TRAMOS_INDEMNIZACION = [
    (3, 15),
    (6, 30),
    (12, 45),
]
DIAS_INDEMNIZACION_PRIMER_ANIO = 60
DIAS_INDEMNIZACION_POR_ANIO_ADICIONAL = 30


# ==============================================================================
# --- 2. PARÁMETROS VALIDADOS ---
# ==============================================================================

@dataclass(frozen=True)
class ParametrosCiclo:
    """Constantes de la fórmula de pago semanal/quincenal."""
    dias_laborables: int = DIAS_LABORABLES_POR_DEFECTO
    modo_hora_extra: str = "fija"
    tarifa_hora_extra: float = TARIFA_HORA_EXTRA_FIJA
    multiplicador_hora_extra: float = MULTIPLICADOR_HORA_EXTRA
    multiplicador_fin_de_semana: float = MULTIPLICADOR_FIN_DE_SEMANA
    multiplicador_quincenal: float = MULTIPLICADOR_QUINCENAL
    version: str = VERSION_FORMULAS

    def __post_init__(self):
        if not 1 <= self.dias_laborables <= DIAS_POR_SEMANA:
            raise ErrorConfiguracion(
                f"dias_laborables debe estar entre 1 y {DIAS_POR_SEMANA} (recibido: {self.dias_laborables})."
            )
        if self.modo_hora_extra not in MODOS_HORA_EXTRA:
            raise ErrorConfiguracion(
                f"modo_hora_extra debe ser uno de {MODOS_HORA_EXTRA} (recibido: {self.modo_hora_extra!r})."
            )
        for nombre in ("tarifa_hora_extra", "multiplicador_hora_extra",
                       "multiplicador_fin_de_semana", "multiplicador_quincenal"):
            if getattr(self, nombre) < 0:
                raise ErrorConfiguracion(f"{nombre} no puede ser negativo.")

    def tarifa_por_hora_extra(self, tarifa_diaria: float) -> float:
        """Precio de una hora extra según el modo configurado."""
        if self.modo_hora_extra == "multiplicador":
            return (tarifa_diaria / HORAS_POR_JORNADA) * self.multiplicador_hora_extra
        return self.tarifa_hora_extra


@dataclass(frozen=True)
class ParametrosLiquidacion:
    """
    Parámetros legales de la liquidación.
    dias_base_vacaciones = None aplica la escala progresiva (15 + 1 por año).
    """
    dias_utilidades_por_anio: float = DIAS_UTILIDADES_POR_DEFECTO
    dias_base_vacaciones: Optional[float] = None

    def __post_init__(self):
        if not DIAS_UTILIDADES_MIN <= self.dias_utilidades_por_anio <= DIAS_UTILIDADES_MAX:
            raise ErrorConfiguracion(
                f"Los días de utilidades deben estar entre {DIAS_UTILIDADES_MIN} y "
                f"{DIAS_UTILIDADES_MAX} (recibido: {self.dias_utilidades_por_anio})."
            )
        if self.dias_base_vacaciones is not None and not (
            DIAS_VACACIONES_MIN <= self.dias_base_vacaciones <= DIAS_VACACIONES_MAX
        ):
            raise ErrorConfiguracion(
                f"Los días base de vacaciones deben estar entre {DIAS_VACACIONES_MIN} y "
                f"{DIAS_VACACIONES_MAX} (recibido: {self.dias_base_vacaciones})."
            )


# ==============================================================================
# --- 3. CARGA DESDE EL ENTORNO ---
# ==============================================================================

def _cargar_entorno() -> None:
    """Lee el .env del directorio de trabajo sin pisar variables ya definidas."""
    load_dotenv(find_dotenv(usecwd=True))


def _leer_entorno(nombre: str, conversor: Callable, defecto):
    crudo = os.getenv(nombre)
    if crudo is None or crudo.strip() == "":
        return defecto
    try:
        return conversor(crudo.strip())
    except ValueError:
        raise ErrorConfiguracion(f"Valor inválido en {nombre}: {crudo!r}") from None


def cargar_parametros_ciclo() -> ParametrosCiclo:
    _cargar_entorno()
    parametros = ParametrosCiclo(
        dias_laborables=_leer_entorno("NOMINA_DIAS_LABORABLES", int, DIAS_LABORABLES_POR_DEFECTO),
        modo_hora_extra=_leer_entorno("NOMINA_MODO_HORA_EXTRA", str, "fija"),
        tarifa_hora_extra=_leer_entorno("NOMINA_TARIFA_HORA_EXTRA", float, TARIFA_HORA_EXTRA_FIJA),
        multiplicador_hora_extra=_leer_entorno("NOMINA_MULTIPLICADOR_HORA_EXTRA", float, MULTIPLICADOR_HORA_EXTRA),
        multiplicador_fin_de_semana=_leer_entorno("NOMINA_MULTIPLICADOR_FIN_DE_SEMANA", float, MULTIPLICADOR_FIN_DE_SEMANA),
        multiplicador_quincenal=_leer_entorno("NOMINA_MULTIPLICADOR_QUINCENAL", float, MULTIPLICADOR_QUINCENAL),
    )
    _logger.debug("Parámetros de ciclo cargados: %s", parametros)
    return parametros


def cargar_parametros_liquidacion() -> ParametrosLiquidacion:
    _cargar_entorno()
    parametros = ParametrosLiquidacion(
        dias_utilidades_por_anio=_leer_entorno("NOMINA_DIAS_UTILIDADES", float, DIAS_UTILIDADES_POR_DEFECTO),
        dias_base_vacaciones=_leer_entorno("NOMINA_DIAS_VACACIONES", float, None),
    )
    _logger.debug("Parámetros de liquidación cargados: %s", parametros)
    return parametros


def configurar_logging(nivel: Optional[str] = None) -> None:
    """Configuración básica para el anfitrión; el motor nunca la invoca."""
    nivel = (nivel or os.getenv("NOMINA_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, nivel, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
