import dataclasses
import unittest

from core.configuracion import FaixaCusto, cargar_configuracion
from core.errores import InvalidInputError
from core.financiamiento import calcular_parcela
from core.sizing import (
    aplicar_piso,
    custo_efetivo_kwp,
    economia_mensal,
    prazo_referencia,
    potencia_implicita,
    redondear_potencia,
    solve,
    valor_sistema,
)


class TestSizing(unittest.TestCase):
    def setUp(self):
        self.cfg = cargar_configuracion()

    def test_presupuesto_holgado(self):
        rec = solve(500, 0.95, self.cfg)
        self.assertGreater(rec.power_kwp, self.cfg.potencia_minima_kwp)
        self.assertGreater(rec.monthly_economy, 0)
        self.assertFalse(rec.budget_constrained)
        self.assertAlmostEqual(3.85, rec.power_kwp, places=6)
        self.assertAlmostEqual(17325.0, rec.system_value, places=6)

    def test_presupuesto_bajo_el_piso(self):
        rec = solve(1, 0.95, self.cfg)
        self.assertEqual(self.cfg.potencia_minima_kwp, rec.power_kwp)
        self.assertTrue(rec.budget_constrained)
        self.assertEqual(1.0, rec.client_budget)

    def test_monotonia(self):
        anterior = 0.0
        for budget in range(20, 4000, 37):
            kwp = solve(budget, 0.95, self.cfg).power_kwp
            self.assertGreaterEqual(kwp, anterior)
            anterior = kwp

    def test_consistencia_derivados(self):
        for budget in (1, 150, 500, 1234.5, 3000):
            rec = solve(budget, 0.80, self.cfg)
            self.assertEqual(rec.power_kwp * rec.cost_per_kwp, rec.system_value)
            self.assertEqual(rec.power_kwp * self.cfg.rendimento_kwh_kwp_mes, rec.monthly_generation_kwh)

    def test_tope_en_factura(self):
        rec = solve(2000, 0.95, self.cfg, current_bill=120)
        self.assertLessEqual(rec.monthly_economy, 120)
        self.assertEqual(120, rec.current_bill)

    def test_entradas_invalidas(self):
        for budget in (0, -10, float("nan"), float("inf"), None, True):
            with self.assertRaises(InvalidInputError):
                solve(budget, 0.95, self.cfg)
        with self.assertRaises(InvalidInputError):
            solve(500, 0, self.cfg)

    def test_prazo_referencia_mediana(self):
        cfg = dataclasses.replace(self.cfg, prazo_referencia_meses=None)
        self.assertEqual(48, prazo_referencia(cfg).meses)
        self.assertEqual(60, prazo_referencia(self.cfg).meses)

    def test_redondeo_hacia_abajo(self):
        self.assertAlmostEqual(3.85, redondear_potencia(4.06, self.cfg))
        self.assertAlmostEqual(3.85, redondear_potencia(4.13, self.cfg))
        self.assertAlmostEqual(4.4, redondear_potencia(4.4, self.cfg))
        sin_inc = dataclasses.replace(self.cfg, incremento_modulo_kwp=0.0)
        self.assertAlmostEqual(4.06, redondear_potencia(4.066, sin_inc))

    def test_piso_antes_de_redondear(self):
        self.assertEqual((1.0, True), aplicar_piso(0.9, self.cfg))
        self.assertEqual((1.0, False), aplicar_piso(1.05, self.cfg))
        self.assertEqual((1.1, False), aplicar_piso(1.2, self.cfg))

    def test_potencia_implicita_bajo_el_piso_queda_limitada(self):
        # 110 R$/mes implica ~0.89 kWp: debajo del piso aunque el primer módulo sea 1.1 kWp
        self.assertLess(potencia_implicita(110, self.cfg), self.cfg.potencia_minima_kwp)
        rec = solve(110, 0.95, self.cfg)
        self.assertTrue(rec.budget_constrained)
        self.assertEqual(self.cfg.potencia_minima_kwp, rec.power_kwp)

    def test_parcela_de_referencia_cabe_en_presupuesto(self):
        prazo = prazo_referencia(self.cfg)
        for budget in range(130, 4000, 53):
            rec = solve(budget, 0.95, self.cfg)
            self.assertFalse(rec.budget_constrained)
            parcela = calcular_parcela(rec.system_value, prazo.taxa_mensal, prazo.meses)
            self.assertLessEqual(parcela, budget + 1e-6)

    def test_economia(self):
        self.assertAlmostEqual(100 * 0.9 * self.cfg.fator_compensacao, economia_mensal(100, 0.9, self.cfg))
        self.assertEqual(10, economia_mensal(100, 0.9, self.cfg, current_bill=10))


class TestSizingPorFaixas(unittest.TestCase):
    def setUp(self):
        base = cargar_configuracion()
        self.cfg = dataclasses.replace(
            base,
            incremento_modulo_kwp=0.0,
            faixas_custo=(FaixaCusto(5.0, 4800.0), FaixaCusto(None, 4200.0)),
        )

    def test_valor_marginal(self):
        self.assertAlmostEqual(4 * 4800, valor_sistema(4, self.cfg))
        self.assertAlmostEqual(5 * 4800 + 3 * 4200, valor_sistema(8, self.cfg))
        self.assertAlmostEqual(valor_sistema(8, self.cfg) / 8, custo_efetivo_kwp(8, self.cfg))

    def test_biseccion_cabe_en_presupuesto(self):
        plazo = prazo_referencia(self.cfg)
        for budget in (300, 1500, 4000):
            kwp = potencia_implicita(budget, self.cfg)
            parcela = calcular_parcela(valor_sistema(kwp, self.cfg), plazo.taxa_mensal, plazo.meses)
            self.assertAlmostEqual(budget, parcela, delta=0.01)

    def test_biseccion_bajo_el_piso(self):
        self.assertEqual(0.0, potencia_implicita(1, self.cfg))
        rec = solve(1, 0.95, self.cfg)
        self.assertTrue(rec.budget_constrained)
        self.assertEqual(self.cfg.potencia_minima_kwp, rec.power_kwp)

    def test_consistencia_con_faixas(self):
        rec = solve(1500, 0.95, self.cfg)
        self.assertAlmostEqual(rec.power_kwp * rec.cost_per_kwp, rec.system_value, places=6)
        self.assertGreater(rec.power_kwp, 5.0)


if __name__ == "__main__":
    unittest.main()
