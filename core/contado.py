# core/contado.py
from __future__ import annotations

from .configuracion import Configuration
from .errores import InvalidInputError
from .finanzas_lp import vpl_economia
from .modelo import CashOption, Recommendation
from .validacion import es_finito


def payback_simple(valor: float, economia_mensal: float):
    """Años para recuperar `valor`; None si la economía no es positiva."""
    if economia_mensal <= 0:
        return None
    return float(valor) / (float(economia_mensal) * 12.0)


def build_cash_option(recommendation: Recommendation, cfg: Configuration) -> CashOption:
    valor = recommendation.system_value
    economia = recommendation.monthly_economy
    desconto = cfg.desconto_a_vista

    for nombre, v in (("system_value", valor), ("monthly_economy", economia), ("desconto_a_vista", desconto)):
        if not es_finito(v):
            raise InvalidInputError(f"{nombre} debe ser finito. Valor={v!r}")

    original = float(valor)
    con_desconto = original * (1 - float(desconto))

    return CashOption(
        original_value=original,
        discount_percent=float(desconto),
        discounted_value=con_desconto,
        discount_savings=original - con_desconto,
        payback_years=payback_simple(con_desconto, float(economia)),
        npv=vpl_economia(con_desconto, float(economia), cfg),
    )
