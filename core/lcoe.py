# core/lcoe.py
from __future__ import annotations

from .configuracion import Configuration
from .errores import DegenerateConfigurationError
from .finanzas_lp import geracao_anual
from .modelo import Recommendation


def geracao_vida_util(recommendation: Recommendation, cfg: Configuration) -> float:
    return sum(
        geracao_anual(recommendation.monthly_generation_kwh, ano, cfg)
        for ano in range(int(cfg.horizonte_anos))
    )


def compute_lcoe(recommendation: Recommendation, cfg: Configuration) -> float:
    """Costo nivelado (R$/kWh) = valor del sistema / generación de toda la vida útil."""
    total_kwh = geracao_vida_util(recommendation, cfg)
    if total_kwh <= 0:
        raise DegenerateConfigurationError("Generación de vida útil nula: LCOE indefinido")
    return float(recommendation.system_value) / total_kwh
