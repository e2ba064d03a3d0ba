from __future__ import annotations

import unittest
from datetime import date

from modelos import Empleado, ErrorValidacion, EstadoEmpleado
from plantilla import (
    actualizar_bono,
    cambiar_estado,
    reactivar_suspensiones_vencidas,
    suspender,
    validar_empleado,
)


def _empleado(**campos) -> Empleado:
    datos = dict(id="1", nombre_completo="Sofía Martínez", salario_base_semanal=60, fecha_ingreso=date(2022, 4, 1))
    datos.update(campos)
    return Empleado(**datos)


class TestValidarEmpleado(unittest.TestCase):
    def test_valid_employee(self) -> None:
        empleado = _empleado()
        self.assertIs(validar_empleado(empleado), empleado)

    def test_salary_and_bonus(self) -> None:
        with self.assertRaises(ErrorValidacion):
            validar_empleado(_empleado(salario_base_semanal=0))
        with self.assertRaises(ErrorValidacion):
            validar_empleado(_empleado(bono_semanal=-5))

    def test_suspension_date_requires_suspended_status(self) -> None:
        with self.assertRaises(ErrorValidacion):
            validar_empleado(_empleado(suspendido_hasta=date(2024, 7, 1)))
        with self.assertRaises(ErrorValidacion):
            validar_empleado(_empleado(estado="Suspendido"))

    def test_unknown_status_rejected(self) -> None:
        with self.assertRaises(ErrorValidacion):
            _empleado(estado="Jubilado")


class TestEstados(unittest.TestCase):
    def test_status_change_clears_return_date(self) -> None:
        suspendido = suspender(_empleado(), 3, desde=date(2024, 6, 10))
        despedido = cambiar_estado(suspendido, "Despedido")
        self.assertIs(despedido.estado, EstadoEmpleado.DESPEDIDO)
        self.assertIsNone(despedido.suspendido_hasta)

    def test_suspension_goes_through_suspender(self) -> None:
        with self.assertRaises(ErrorValidacion):
            cambiar_estado(_empleado(), EstadoEmpleado.SUSPENDIDO)

    def test_suspend_sets_return_date(self) -> None:
        empleado = suspender(_empleado(), 3, desde=date(2024, 6, 10))
        self.assertIs(empleado.estado, EstadoEmpleado.SUSPENDIDO)
        self.assertEqual(empleado.suspendido_hasta, date(2024, 6, 13))
        validar_empleado(empleado)
        with self.assertRaises(ErrorValidacion):
            suspender(_empleado(), 0)

    def test_expired_suspensions_are_reactivated(self) -> None:
        vencido = suspender(_empleado(id="1"), 3, desde=date(2024, 6, 10))
        vigente = suspender(_empleado(id="2"), 10, desde=date(2024, 6, 10))
        activo = _empleado(id="3")

        plantilla, reactivados = reactivar_suspensiones_vencidas([vencido, vigente, activo], hoy=date(2024, 6, 13))

        self.assertEqual(reactivados, ["1"])
        self.assertEqual([e.estado for e in plantilla], [
            EstadoEmpleado.ACTIVO, EstadoEmpleado.SUSPENDIDO, EstadoEmpleado.ACTIVO,
        ])
        self.assertIsNone(plantilla[0].suspendido_hasta)
        self.assertIs(plantilla[2], activo)

    def test_update_bonus(self) -> None:
        self.assertEqual(actualizar_bono(_empleado(), 15).bono_semanal, 15)
        with self.assertRaises(ErrorValidacion):
            actualizar_bono(_empleado(), -1)


if __name__ == "__main__":
    unittest.main()
