from __future__ import annotations

import unittest
from datetime import date

from asistencia import (
    ajustar_horas_extra,
    alternar_dia,
    asistencia_por_defecto,
    es_feriado_venezolano,
    fechas_semana,
    normalizar_asistencia,
    semana_por_defecto,
)
from modelos import Empleado, ErrorValidacion, EstadoDia

W, A, H = EstadoDia.TRABAJADO, EstadoDia.AUSENTE, EstadoDia.FERIADO


class TestCalendario(unittest.TestCase):
    def test_fixed_holidays(self) -> None:
        self.assertTrue(es_feriado_venezolano(date(2024, 7, 5)))
        self.assertTrue(es_feriado_venezolano(date(2031, 12, 31)))
        self.assertFalse(es_feriado_venezolano(date(2024, 7, 6)))

    def test_week_starts_on_monday(self) -> None:
        fechas = fechas_semana(date(2024, 6, 27))
        self.assertEqual(fechas[0], date(2024, 6, 24))
        self.assertEqual(fechas[-1], date(2024, 6, 30))
        self.assertEqual(len(fechas), 7)
        self.assertEqual(fechas_semana(date(2024, 6, 24))[0], date(2024, 6, 24))

    def test_default_week_marks_holidays(self) -> None:
        # lunes 24 de junio: Batalla de Carabobo
        semana = semana_por_defecto(fechas_semana(date(2024, 6, 27)))
        self.assertEqual(semana, (H, W, W, W, W, A, A))

    def test_default_week_six_day_convention(self) -> None:
        semana = semana_por_defecto(fechas_semana(date(2024, 6, 5)), dias_laborables=6)
        self.assertEqual(semana, (W, W, W, W, W, W, A))

    def test_default_attendance_for_roster(self) -> None:
        empleados = [
            Empleado(id="1", nombre_completo="Ana", salario_base_semanal=50, fecha_ingreso="2022-01-10"),
            Empleado(id="2", nombre_completo="Luis", salario_base_semanal=60, fecha_ingreso="2023-05-02"),
        ]
        asistencia = asistencia_por_defecto(empleados, date(2024, 6, 5))
        self.assertEqual(set(asistencia), {"1", "2"})
        self.assertEqual(asistencia["1"], (W, W, W, W, W, A, A))


class TestMarcas(unittest.TestCase):
    def test_normalize_pads_with_absent(self) -> None:
        self.assertEqual(normalizar_asistencia(["worked", "holiday"]), (W, H, A, A, A, A, A))
        self.assertEqual(normalizar_asistencia(None), (A,) * 7)

    def test_normalize_rejects_unknown_or_extra_marks(self) -> None:
        with self.assertRaises(ErrorValidacion):
            normalizar_asistencia(["worked", "sick"])
        with self.assertRaises(ErrorValidacion):
            normalizar_asistencia(["worked"] * 8)

    def test_toggle_cycle(self) -> None:
        registro = normalizar_asistencia(None)
        vistos = []
        for _ in range(3):
            registro = alternar_dia(registro, 2)
            vistos.append(registro[2])
        self.assertEqual(vistos, [W, H, A])
        self.assertEqual(alternar_dia(["excused"], 0)[0], A)

    def test_toggle_index_out_of_range(self) -> None:
        with self.assertRaises(ErrorValidacion):
            alternar_dia(None, 7)

    def test_extra_hours_never_negative(self) -> None:
        self.assertEqual(ajustar_horas_extra(2, 1), 3)
        self.assertEqual(ajustar_horas_extra(1, -3), 0)
        self.assertEqual(ajustar_horas_extra(None, 0.5), 0.5)


if __name__ == "__main__":
    unittest.main()
