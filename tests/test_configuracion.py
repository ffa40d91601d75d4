import dataclasses
import tempfile
import unittest
from pathlib import Path

import yaml

from core.configuracion import (
    CONFIG_DEFAULT,
    Configuration,
    cargar_configuracion,
    configuracion_desde_dict,
    configuracion_desde_hsp,
    construir_config_efectiva,
)
from core.errores import DegenerateConfigurationError
from core.validacion import validar_configuracion


class TestConfiguracion(unittest.TestCase):
    def setUp(self):
        self.cfg = cargar_configuracion()

    def test_yaml_por_defecto(self):
        cfg = self.cfg
        self.assertIsInstance(cfg, Configuration)
        self.assertAlmostEqual(115.2, cfg.rendimento_kwh_kwp_mes)
        self.assertEqual(25, cfg.horizonte_anos)
        self.assertEqual(60, cfg.prazo_referencia_meses)
        self.assertEqual([12, 24, 36, 48, 60, 72, 84, 96], [p.meses for p in cfg.prazos])
        self.assertAlmostEqual(0.0179, cfg.taxa_do_prazo(60))
        self.assertAlmostEqual(0.01, cfg.taxa_desconto_vpl)
        validar_configuracion(cfg)

    def test_taxa_desconto_vpl_negativa(self):
        with self.assertRaises(DegenerateConfigurationError):
            validar_configuracion(dataclasses.replace(self.cfg, taxa_desconto_vpl=-0.01))
        validar_configuracion(dataclasses.replace(self.cfg, taxa_desconto_vpl=0.0))

    def test_prazo_inexistente(self):
        with self.assertRaises(DegenerateConfigurationError):
            self.cfg.taxa_do_prazo(7)

    def test_dict_plano_y_prazos_compactos(self):
        d = dataclasses.asdict(self.cfg)
        d["prazos"] = {24: 0.02, 12: 0.021}
        d["faixas_custo"] = []
        cfg = configuracion_desde_dict(d)
        self.assertEqual([12, 24], [p.meses for p in cfg.prazos])

    def test_clave_desconocida(self):
        d = dataclasses.asdict(self.cfg)
        d["custo_painel"] = 1.0
        with self.assertRaises(DegenerateConfigurationError):
            configuracion_desde_dict(d)

    def test_clave_faltante(self):
        d = dataclasses.asdict(self.cfg)
        del d["custo_kwp"]
        with self.assertRaises(DegenerateConfigurationError):
            configuracion_desde_dict(d)

    def test_valor_no_numerico(self):
        d = dataclasses.asdict(self.cfg)
        d["custo_kwp"] = "caro"
        with self.assertRaises(DegenerateConfigurationError):
            configuracion_desde_dict(d)

    def test_archivo_inexistente(self):
        with self.assertRaises(FileNotFoundError):
            cargar_configuracion(Path("no_existe_123.yaml"))

    def test_yaml_propio(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "cfg.yaml"
            doc = yaml.safe_load(CONFIG_DEFAULT.read_text(encoding="utf-8"))
            doc["financieros"]["custo_kwp"] = 3900.0
            p.write_text(yaml.safe_dump(doc), encoding="utf-8")
            self.assertEqual(3900.0, cargar_configuracion(p).custo_kwp)

    def test_yaml_no_dict(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "cfg.yaml"
            p.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(DegenerateConfigurationError):
                cargar_configuracion(p)

    def test_overrides(self):
        cfg = construir_config_efectiva(self.cfg, {"financieros": {"reajuste_tarifa_anual": 0.06}})
        self.assertEqual(0.06, cfg.reajuste_tarifa_anual)
        self.assertEqual(self.cfg.custo_kwp, cfg.custo_kwp)
        self.assertIs(self.cfg, construir_config_efectiva(self.cfg, None))

    def test_desde_hsp(self):
        cfg = configuracion_desde_hsp(self.cfg, 5.0)
        self.assertAlmostEqual(5.0 * 30 * 0.80, cfg.rendimento_kwh_kwp_mes)


class TestValidarConfiguracion(unittest.TestCase):
    def setUp(self):
        self.cfg = cargar_configuracion()

    def _invalida(self, **cambios):
        with self.assertRaises(DegenerateConfigurationError):
            validar_configuracion(dataclasses.replace(self.cfg, **cambios))

    def test_prazos_vacios(self):
        self._invalida(prazos=(), prazo_referencia_meses=None)

    def test_prazo_referencia_no_ofrecido(self):
        self._invalida(prazo_referencia_meses=18)

    def test_parametros_fuera_de_rango(self):
        self._invalida(rendimento_kwh_kwp_mes=0.0)
        self._invalida(custo_kwp=-1.0)
        self._invalida(desconto_a_vista=1.0)
        self._invalida(horizonte_anos=0)
        self._invalida(fator_compensacao=0.0)
        self._invalida(degradacao_anual=float("nan"))

    def test_limites_incoherentes(self):
        self._invalida(limite_bom_reais=500.0)
        self._invalida(limite_regular_pct=-0.1)


if __name__ == "__main__":
    unittest.main()
