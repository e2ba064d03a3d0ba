from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from configuracion import (
    ErrorConfiguracion,
    ParametrosCiclo,
    ParametrosLiquidacion,
    VERSION_FORMULAS,
    cargar_parametros_ciclo,
    cargar_parametros_liquidacion,
)
from modelos import ErrorValidacion

VARIABLES = (
    "NOMINA_DIAS_LABORABLES",
    "NOMINA_MODO_HORA_EXTRA",
    "NOMINA_TARIFA_HORA_EXTRA",
    "NOMINA_MULTIPLICADOR_HORA_EXTRA",
    "NOMINA_MULTIPLICADOR_FIN_DE_SEMANA",
    "NOMINA_MULTIPLICADOR_QUINCENAL",
    "NOMINA_DIAS_UTILIDADES",
    "NOMINA_DIAS_VACACIONES",
)


def _entorno(**valores: str) -> dict:
    """Variables NOMINA_* vacías salvo las indicadas."""
    entorno = {nombre: "" for nombre in VARIABLES}
    entorno.update(valores)
    return entorno


class TestParametrosCiclo(unittest.TestCase):
    def test_defaults(self) -> None:
        parametros = ParametrosCiclo()
        self.assertEqual(parametros.dias_laborables, 5)
        self.assertEqual(parametros.modo_hora_extra, "fija")
        self.assertEqual(parametros.multiplicador_quincenal, 2.14)
        self.assertEqual(parametros.multiplicador_fin_de_semana, 2)
        self.assertEqual(parametros.version, VERSION_FORMULAS)

    def test_working_days_range(self) -> None:
        for dias in (0, 8, -1):
            with self.subTest(dias=dias):
                with self.assertRaises(ErrorConfiguracion):
                    ParametrosCiclo(dias_laborables=dias)
        self.assertEqual(ParametrosCiclo(dias_laborables=7).dias_laborables, 7)

    def test_unknown_extra_hour_mode(self) -> None:
        with self.assertRaises(ErrorConfiguracion):
            ParametrosCiclo(modo_hora_extra="doble")

    def test_negative_rates_rejected(self) -> None:
        with self.assertRaises(ErrorConfiguracion):
            ParametrosCiclo(tarifa_hora_extra=-1)
        with self.assertRaises(ErrorConfiguracion):
            ParametrosCiclo(multiplicador_quincenal=-2.14)

    def test_extra_hour_rate_by_mode(self) -> None:
        self.assertEqual(ParametrosCiclo().tarifa_por_hora_extra(10), 2.0)
        multiplicador = ParametrosCiclo(modo_hora_extra="multiplicador", multiplicador_hora_extra=2)
        self.assertAlmostEqual(multiplicador.tarifa_por_hora_extra(16), 4.0)

    def test_configuration_error_is_a_validation_error(self) -> None:
        self.assertTrue(issubclass(ErrorConfiguracion, ErrorValidacion))
        self.assertTrue(issubclass(ErrorConfiguracion, ValueError))


class TestParametrosLiquidacion(unittest.TestCase):
    def test_utility_days_limits(self) -> None:
        self.assertEqual(ParametrosLiquidacion(15).dias_utilidades_por_anio, 15)
        self.assertEqual(ParametrosLiquidacion(120).dias_utilidades_por_anio, 120)
        for dias in (14, 121, 0):
            with self.subTest(dias=dias):
                with self.assertRaises(ErrorConfiguracion):
                    ParametrosLiquidacion(dias)

    def test_vacation_days_limits(self) -> None:
        self.assertIsNone(ParametrosLiquidacion().dias_base_vacaciones)
        self.assertEqual(ParametrosLiquidacion(dias_base_vacaciones=30).dias_base_vacaciones, 30)
        with self.assertRaises(ErrorConfiguracion):
            ParametrosLiquidacion(dias_base_vacaciones=14)


class TestCargaDesdeEntorno(unittest.TestCase):
    def test_empty_environment_uses_defaults(self) -> None:
        with mock.patch.dict(os.environ, _entorno()):
            self.assertEqual(cargar_parametros_ciclo(), ParametrosCiclo())
            self.assertEqual(cargar_parametros_liquidacion(), ParametrosLiquidacion())

    def test_cycle_overrides(self) -> None:
        entorno = _entorno(
            NOMINA_DIAS_LABORABLES="6",
            NOMINA_MODO_HORA_EXTRA="multiplicador",
            NOMINA_MULTIPLICADOR_HORA_EXTRA="1.75",
        )
        with mock.patch.dict(os.environ, entorno):
            parametros = cargar_parametros_ciclo()
        self.assertEqual(parametros.dias_laborables, 6)
        self.assertEqual(parametros.modo_hora_extra, "multiplicador")
        self.assertEqual(parametros.multiplicador_hora_extra, 1.75)

    def test_liquidation_overrides(self) -> None:
        with mock.patch.dict(os.environ, _entorno(NOMINA_DIAS_UTILIDADES="90", NOMINA_DIAS_VACACIONES=" 20 ")):
            parametros = cargar_parametros_liquidacion()
        self.assertEqual(parametros.dias_utilidades_por_anio, 90)
        self.assertEqual(parametros.dias_base_vacaciones, 20)

    def test_malformed_value(self) -> None:
        with mock.patch.dict(os.environ, _entorno(NOMINA_DIAS_LABORABLES="cinco")):
            with self.assertRaises(ErrorConfiguracion):
                cargar_parametros_ciclo()

    def test_out_of_range_value(self) -> None:
        with mock.patch.dict(os.environ, _entorno(NOMINA_DIAS_UTILIDADES="200")):
            with self.assertRaises(ErrorConfiguracion):
                cargar_parametros_liquidacion()


RAIZ = Path(__file__).resolve().parents[1]


class TestArchivoEnv(unittest.TestCase):
    """Se ejecuta en un intérprete aparte, desde un directorio con .env."""

    def setUp(self) -> None:
        self.directorio = tempfile.TemporaryDirectory()
        self.addCleanup(self.directorio.cleanup)
        Path(self.directorio.name, ".env").write_text(
            "NOMINA_VARIABLE_LOCAL=desde_env\nNOMINA_DIAS_LABORABLES=6\n", encoding="utf-8"
        )

    def _ejecutar(self, codigo: str) -> str:
        entorno = {k: v for k, v in os.environ.items() if not k.startswith("NOMINA_")}
        entorno["PYTHONPATH"] = os.pathsep.join(filter(None, [str(RAIZ), entorno.get("PYTHONPATH")]))
        salida = subprocess.run(
            [sys.executable, "-c", codigo],
            cwd=self.directorio.name,
            env=entorno,
            capture_output=True,
            text=True,
            check=True,
        )
        return salida.stdout.strip()

    def test_importing_engine_leaves_environment_untouched(self) -> None:
        codigo = (
            "import os, motor, liquidacion, configuracion\n"
            "print(os.environ.get('NOMINA_VARIABLE_LOCAL'))"
        )
        self.assertEqual(self._ejecutar(codigo), "None")

    def test_loader_reads_env_file(self) -> None:
        codigo = (
            "import configuracion\n"
            "print(configuracion.cargar_parametros_ciclo().dias_laborables)"
        )
        self.assertEqual(self._ejecutar(codigo), "6")


if __name__ == "__main__":
    unittest.main()
