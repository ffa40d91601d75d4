# core/escenarios.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .configuracion import Configuration
from .modelo import Recommendation
from .sizing import aplicar_piso, recomendacion_para_potencia
from .validacion import exigir_positivo


@dataclass(frozen=True)
class CenariosDimensionamento:
    fluxo_zero: Recommendation        # economía mensual = presupuesto
    fluxo_positivo: Recommendation    # economía mensual = presupuesto + folga
    folga_alvo: float


def potencia_para_economia(economia_alvo: float, current_tariff: float, cfg: Configuration) -> float:
    """Inversa de economía = kWp x rendimiento x tarifa x factor (sin tope de factura)."""
    return float(economia_alvo) / (
        float(cfg.rendimento_kwh_kwp_mes) * float(current_tariff) * float(cfg.fator_compensacao)
    )


def _cenario(economia_alvo: float, tarifa: float, cfg: Configuration, budget: float, conta: Optional[float]) -> Recommendation:
    kwp, limitado = aplicar_piso(potencia_para_economia(economia_alvo, tarifa, cfg), cfg)
    return recomendacion_para_potencia(
        kwp, tarifa, cfg,
        current_bill=conta,
        client_budget=budget,
        budget_constrained=limitado,
    )


def analisar_cenarios(
    client_budget: float,
    current_tariff: float,
    cfg: Configuration,
    current_bill: Optional[float] = None,
) -> CenariosDimensionamento:
    """
    Tamaños alternativos a la recomendación principal, pensando el presupuesto
    como la economía que el sistema debe generar:
      - fluxo_zero: la parcela se paga exactamente con la economía.
      - fluxo_positivo: sobra `folga_alvo` todos los meses.
    """
    budget = exigir_positivo(client_budget, "client_budget")
    tarifa = exigir_positivo(current_tariff, "current_tariff")
    conta = None if current_bill is None else exigir_positivo(current_bill, "current_bill")

    folga = min(float(cfg.folga_alvo_reais), float(cfg.folga_alvo_pct) * budget)

    return CenariosDimensionamento(
        fluxo_zero=_cenario(budget, tarifa, cfg, budget, conta),
        fluxo_positivo=_cenario(budget + folga, tarifa, cfg, budget, conta),
        folga_alvo=folga,
    )
