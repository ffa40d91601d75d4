import tempfile
import unittest
from pathlib import Path

from core.configuracion import cargar_configuracion
from core.orquestador import compute
from core.rutas import preparar_salida
from reportes.generar_charts import generar_charts
from reportes.generar_pdf_profesional import _bloque_projecao, generar_pdf_profesional
from reportes.styles import pdf_palette, pdf_styles


class TestReportes(unittest.TestCase):
    def setUp(self):
        self.cfg = cargar_configuracion()
        self.result = compute(500, 0.95, self.cfg, current_bill=450)

    def test_preparar_salida(self):
        with tempfile.TemporaryDirectory() as tmp:
            paths = preparar_salida("out", base=Path(tmp))
            self.assertTrue(Path(paths["out_dir"]).is_dir())
            self.assertTrue(paths["pdf_path"].endswith("proposta_solar.pdf"))

    def test_charts(self):
        with tempfile.TemporaryDirectory() as tmp:
            charts = generar_charts(self.result, 0.95, self.cfg, tmp)
            self.assertEqual({"chart_acumulado", "chart_comparativo", "chart_fluxo"}, set(charts))
            for p in charts.values():
                self.assertTrue(Path(p).exists())
                self.assertGreater(Path(p).stat().st_size, 0)

    def test_pdf_con_charts(self):
        with tempfile.TemporaryDirectory() as tmp:
            paths = {"pdf_path": str(Path(tmp) / "propuesta.pdf")}
            paths.update(generar_charts(self.result, 0.95, self.cfg, tmp))
            pdf = generar_pdf_profesional(self.result, {"cliente": "Cliente Teste", "ubicacion": "MG"}, 0.95, self.cfg, paths)
            self.assertEqual(paths["pdf_path"], pdf)
            self.assertTrue(Path(pdf).read_bytes().startswith(b"%PDF"))

    def test_pdf_sin_charts_ni_pdf_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            paths = {"out_dir": tmp}
            pdf = generar_pdf_profesional(self.result, None, 0.95, self.cfg, paths)
            self.assertTrue(Path(pdf).exists())
            self.assertEqual(pdf, paths["pdf_path"])

    def test_pdf_presupuesto_bajo(self):
        result = compute(1, 0.95, self.cfg)
        with tempfile.TemporaryDirectory() as tmp:
            pdf = generar_pdf_profesional(result, {}, 0.95, self.cfg, {"out_dir": tmp})
            self.assertTrue(Path(pdf).read_bytes().startswith(b"%PDF"))

    def test_estilos_usados(self):
        styles = pdf_styles()
        for nombre in ("H1b", "H2b", "Small"):
            self.assertIn(nombre, styles.byName)

    def test_subtitulo_del_grafico(self):
        styles = pdf_styles()
        with tempfile.TemporaryDirectory() as tmp:
            charts = generar_charts(self.result, 0.95, self.cfg, tmp)
            story = _bloque_projecao(self.result, 0.95, self.cfg, charts, pdf_palette(), styles, 400)
            estilos = [getattr(getattr(f, "style", None), "name", None) for f in story]
            self.assertIn("H2b", estilos)
            sin_chart = _bloque_projecao(self.result, 0.95, self.cfg, {}, pdf_palette(), styles, 400)
            self.assertNotIn("H2b", [getattr(getattr(f, "style", None), "name", None) for f in sin_chart])

    def test_paths_invalido(self):
        with self.assertRaises(TypeError):
            generar_pdf_profesional(self.result, {}, 0.95, self.cfg, ["no-dict"])


if __name__ == "__main__":
    unittest.main()
