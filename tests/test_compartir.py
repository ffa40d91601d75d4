import dataclasses
import unittest

from core.configuracion import cargar_configuracion
from core.orquestador import compute
from reportes.compartir import formatar_telefone, gerar_link_whatsapp, gerar_texto_resumo


class TestCompartir(unittest.TestCase):
    def setUp(self):
        self.cfg = cargar_configuracion()

    def test_link_con_telefono(self):
        self.assertEqual("https://wa.me/5531999998888?text=oi", gerar_link_whatsapp("(31) 99999-8888", "oi"))
        self.assertEqual("https://wa.me/5531999998888", gerar_link_whatsapp("31 99999 8888"))
        self.assertEqual("https://wa.me/5531999998888", gerar_link_whatsapp("+55 31 99999-8888"))

    def test_link_sin_telefono(self):
        self.assertEqual("https://wa.me/?text=a%20b", gerar_link_whatsapp(None, "a b"))
        self.assertEqual("https://wa.me/", gerar_link_whatsapp("", None))

    def test_formatar_telefone(self):
        self.assertEqual("(31) 99999-8888", formatar_telefone("31999998888"))
        self.assertEqual("(31) 3333-4444", formatar_telefone("3133334444"))
        self.assertEqual("123", formatar_telefone("123"))
        self.assertEqual("", formatar_telefone(None))

    def test_resumo(self):
        result = compute(500, 0.95, self.cfg)
        txt = gerar_texto_resumo(result, 500, self.cfg)
        self.assertIn("ANÁLISE SOLAR PERSONALIZADA", txt)
        self.assertIn("R$ 500,00/mês", txt)
        self.assertIn("3,85 kWp", txt)
        self.assertIn("reajuste energético de 8% a.a.", txt)
        self.assertIn("96x", txt)

    def test_resumo_usa_reajuste_configurado(self):
        cfg = dataclasses.replace(self.cfg, reajuste_tarifa_anual=0.06)
        txt = gerar_texto_resumo(compute(500, 0.95, cfg), 500, cfg)
        self.assertIn("reajuste energético de 6% a.a.", txt)

    def test_resumo_sin_opciones_viables(self):
        result = compute(500, 0.10, self.cfg)
        txt = gerar_texto_resumo(result, 500, self.cfg)
        self.assertIn("12x", txt)
        self.assertNotIn("96x", txt)


if __name__ == "__main__":
    unittest.main()
