# core/configuracion.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errores import DegenerateConfigurationError

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"
CONFIG_DEFAULT = CONFIG_DIR / "parametros_financieros.yaml"

_SECCIONES = ("tecnicos", "financieros", "viabilidade", "cenarios")


@dataclass(frozen=True)
class PrazoFinanciamento:
    meses: int
    taxa_mensal: float                # fracción (0.0179 = 1.79% a.m.)


@dataclass(frozen=True)
class FaixaCusto:
    """Tramo marginal de costo: los kWp hasta `ate_kwp` se cobran a `custo_kwp`."""
    ate_kwp: Optional[float]          # None = sin límite superior
    custo_kwp: float


@dataclass(frozen=True)
class Configuration:
    rendimento_kwh_kwp_mes: float
    custo_kwp: float
    desconto_a_vista: float
    reajuste_tarifa_anual: float
    degradacao_anual: float
    horizonte_anos: int
    fator_compensacao: float
    prazos: Tuple[PrazoFinanciamento, ...]
    potencia_minima_kwp: float
    limite_bom_reais: float
    limite_bom_pct: float
    limite_regular_reais: float
    limite_regular_pct: float
    folga_alvo_reais: float
    folga_alvo_pct: float
    taxa_desconto_vpl: float          # mensual (0.01 = 1% a.m.)
    prazo_referencia_meses: Optional[int] = None
    incremento_modulo_kwp: float = 0.0
    faixas_custo: Tuple[FaixaCusto, ...] = ()

    def taxa_do_prazo(self, meses: int) -> float:
        for p in self.prazos:
            if p.meses == meses:
                return p.taxa_mensal
        raise DegenerateConfigurationError(f"Plazo de {meses} meses no está en la tabla de plazos")

    def prazos_ordenados(self) -> Tuple[PrazoFinanciamento, ...]:
        return tuple(sorted(self.prazos, key=lambda p: p.meses))


_CAMPOS = {f.name: f for f in dataclasses.fields(Configuration)}
_ENTEROS = {"horizonte_anos", "prazo_referencia_meses"}


# ==========================================================
# Conversión desde dict / YAML
# ==========================================================

def _num(valor: Any, campo: str) -> float:
    try:
        return float(valor)
    except (TypeError, ValueError) as e:
        raise DegenerateConfigurationError(f"'{campo}' debe ser numérico. Valor={valor!r}") from e


def _entero(valor: Any, campo: str) -> int:
    v = _num(valor, campo)
    if v != int(v):
        raise DegenerateConfigurationError(f"'{campo}' debe ser entero. Valor={valor!r}")
    return int(v)


def _prazos(valor: Any) -> Tuple[PrazoFinanciamento, ...]:
    if isinstance(valor, Mapping):
        # forma compacta {12: 0.0219, 24: 0.0209}
        items = [{"meses": k, "taxa_mensal": v} for k, v in valor.items()]
    else:
        items = list(valor or [])

    out = []
    for i, it in enumerate(items):
        if isinstance(it, PrazoFinanciamento):
            out.append(it)
            continue
        if not isinstance(it, Mapping) or "meses" not in it or "taxa_mensal" not in it:
            raise DegenerateConfigurationError(f"prazos[{i}] debe tener 'meses' y 'taxa_mensal'")
        out.append(
            PrazoFinanciamento(
                meses=_entero(it["meses"], f"prazos[{i}].meses"),
                taxa_mensal=_num(it["taxa_mensal"], f"prazos[{i}].taxa_mensal"),
            )
        )
    return tuple(sorted(out, key=lambda p: p.meses))


def _faixas(valor: Any) -> Tuple[FaixaCusto, ...]:
    out = []
    for i, it in enumerate(valor or []):
        if isinstance(it, FaixaCusto):
            out.append(it)
            continue
        if not isinstance(it, Mapping) or "custo_kwp" not in it:
            raise DegenerateConfigurationError(f"faixas_custo[{i}] debe tener 'custo_kwp'")
        ate = it.get("ate_kwp")
        out.append(
            FaixaCusto(
                ate_kwp=None if ate is None else _num(ate, f"faixas_custo[{i}].ate_kwp"),
                custo_kwp=_num(it["custo_kwp"], f"faixas_custo[{i}].custo_kwp"),
            )
        )
    return tuple(out)


def _convertir(campo: str, valor: Any) -> Any:
    if campo == "prazos":
        return _prazos(valor)
    if campo == "faixas_custo":
        return _faixas(valor)
    if valor is None and campo == "prazo_referencia_meses":
        return None
    if campo in _ENTEROS:
        return _entero(valor, campo)
    return _num(valor, campo)


def _aplanar(data: Mapping[str, Any]) -> Dict[str, Any]:
    plano: Dict[str, Any] = {}
    for k, v in data.items():
        if k in _SECCIONES:
            if not isinstance(v, Mapping):
                raise DegenerateConfigurationError(f"Sección '{k}' debe ser un mapa")
            plano.update(v)
        else:
            plano[k] = v

    desconocidos = sorted(set(plano) - set(_CAMPOS))
    if desconocidos:
        raise DegenerateConfigurationError(f"Parámetros desconocidos: {desconocidos}")
    return plano


def configuracion_desde_dict(data: Mapping[str, Any]) -> Configuration:
    """Acepta el documento por secciones (como el YAML) o un dict plano."""
    plano = _aplanar(data)
    faltantes = [
        n for n, f in _CAMPOS.items()
        if n not in plano
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    ]
    if faltantes:
        raise DegenerateConfigurationError(f"Faltan parámetros de configuración: {faltantes}")
    return Configuration(**{k: _convertir(k, v) for k, v in plano.items()})


def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise DegenerateConfigurationError(f"Config inválida (debe ser dict): {path}")
    return data


def cargar_configuracion(path: Optional[Path] = None) -> Configuration:
    return configuracion_desde_dict(_leer_yaml(Path(path) if path else CONFIG_DEFAULT))


def construir_config_efectiva(cfg_base: Configuration, overrides: Optional[Mapping[str, Any]]) -> Configuration:
    if not overrides:
        return cfg_base
    plano = _aplanar(overrides)
    return dataclasses.replace(cfg_base, **{k: _convertir(k, v) for k, v in plano.items()})


def configuracion_desde_hsp(cfg: Configuration, hsp: float, performance_ratio: float = 0.80) -> Configuration:
    """Rendimiento mensual = HSP x 30 días x PR."""
    return dataclasses.replace(cfg, rendimento_kwh_kwp_mes=float(hsp) * 30.0 * float(performance_ratio))
