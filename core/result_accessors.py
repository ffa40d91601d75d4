from __future__ import annotations

from typing import Dict, List, Optional

from .configuracion import Configuration
from .finanzas_lp import serie_anual
from .modelo import EXCELLENT, GOOD, FinancingOption, ReverseCalcResult, rango_viabilidad

__all__ = [
    "top_viable_options",
    "opcoes_por_viabilidade",
    "opcao_por_parcelas",
    "serie_comparativa",
    "economia_lcoe_pct",
]


# ==========================================================
# Financiamiento
# ==========================================================
def top_viable_options(result: ReverseCalcResult, n: int = 3) -> List[FinancingOption]:
    """Viabilidad excellent/good, en el orden de plazos configurado."""
    viables = [o for o in result.financing_options if o.viability in (EXCELLENT, GOOD)]
    return viables[:n]


def opcoes_por_viabilidade(result: ReverseCalcResult) -> List[FinancingOption]:
    # sorted es estable: dentro del mismo nivel se mantiene el orden de plazos
    return sorted(result.financing_options, key=lambda o: rango_viabilidad(o.viability))


def opcao_por_parcelas(result: ReverseCalcResult, parcelas: int) -> Optional[FinancingOption]:
    for o in result.financing_options:
        if o.installments == parcelas:
            return o
    return None


# ==========================================================
# Proyección / LCOE
# ==========================================================
def serie_comparativa(result: ReverseCalcResult, current_tariff: float, cfg: Configuration) -> List[Dict[str, float]]:
    """Economía acumulada con reajuste configurado vs tarifa plana, año a año."""
    rec = result.recommendation
    con_reajuste = serie_anual(rec, current_tariff, cfg)
    plana = serie_anual(rec, current_tariff, cfg, reajuste=0.0)

    return [
        {
            "ano": a.ano,
            "acumulado_reajuste": a.economia_acumulada,
            "acumulado_plano": b.economia_acumulada,
            "valor_sistema": rec.system_value,
        }
        for a, b in zip(con_reajuste, plana)
    ]


def economia_lcoe_pct(current_tariff: float, lcoe: float) -> float:
    """% más barato que la tarifa de la distribuidora."""
    if current_tariff <= 0:
        return 0.0
    return (float(current_tariff) - float(lcoe)) / float(current_tariff) * 100.0
