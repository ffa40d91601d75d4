import unittest

from core.irradiancia import HSP_PADRAO, hsp_por_cidade, hsp_por_estado, listar_cidades, listar_estados
from core.rutas import money_BRL, num, pct, rotulo_viabilidade, texto_payback


class TestIrradiancia(unittest.TestCase):
    def test_estado(self):
        self.assertEqual(5.2, hsp_por_estado("MG"))
        self.assertEqual(5.2, hsp_por_estado(" mg "))
        self.assertEqual(HSP_PADRAO, hsp_por_estado("XX"))
        self.assertEqual(HSP_PADRAO, hsp_por_estado(None))

    def test_cidade(self):
        self.assertEqual(5.1, hsp_por_cidade("belo horizonte"))
        self.assertEqual(5.1, hsp_por_cidade("Belo"))
        self.assertEqual(HSP_PADRAO, hsp_por_cidade(""))
        self.assertEqual(HSP_PADRAO, hsp_por_cidade("Atlântida Perdida"))

    def test_listados(self):
        estados = listar_estados()
        self.assertEqual(27, len(estados))
        self.assertIn("MG", [e["codigo"] for e in estados])

        cidades = [c["cidade"] for c in listar_cidades()]
        self.assertEqual(sorted(cidades), cidades)


class TestFormato(unittest.TestCase):
    def test_money_BRL(self):
        self.assertEqual("R$ 1.234,56", money_BRL(1234.56))
        self.assertEqual("R$ 17.325", money_BRL(17325, dec=0))
        self.assertEqual("-R$ 5,00", money_BRL(-5))
        self.assertEqual("R$ -", money_BRL(float("nan")))
        self.assertEqual("R$ -", money_BRL(None))

    def test_num_y_pct(self):
        self.assertEqual("1.234,5", num(1234.5, 1))
        self.assertEqual("8%", pct(0.08, 0))
        self.assertEqual("1,79%", pct(0.0179, 2))

    def test_texto_payback(self):
        self.assertEqual("N/A", texto_payback(None))
        self.assertEqual("6 meses", texto_payback(0.5))
        self.assertEqual("1 mês", texto_payback(1 / 12))
        self.assertEqual("2 anos", texto_payback(2.0))
        self.assertEqual("3 anos e 6 meses", texto_payback(3.5))
        self.assertEqual("1 ano e 1 mês", texto_payback(13 / 12))

    def test_rotulo(self):
        self.assertTrue(rotulo_viabilidade("excellent").startswith("Excelente"))
        self.assertEqual("desconhecido", rotulo_viabilidade("desconhecido"))


if __name__ == "__main__":
    unittest.main()
