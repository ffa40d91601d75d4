# core/finanzas_lp.py
from __future__ import annotations

from typing import List, Optional, Sequence

from .configuracion import Configuration
from .modelo import AnoProjecao, LongTermProjection, Recommendation
from .validacion import exigir_positivo


# ==========================================================
# Curvas base
# ==========================================================

def geracao_anual(monthly_generation_kwh: float, ano: int, cfg: Configuration) -> float:
    """Generación del año `ano` (0 = primer año) con degradación compuesta."""
    return float(monthly_generation_kwh) * (1 - float(cfg.degradacao_anual)) ** ano * 12.0


def tarifa_do_ano(current_tariff: float, ano: int, reajuste: float) -> float:
    return float(current_tariff) * (1 + float(reajuste)) ** ano


def ano_cruce(acumulados: Sequence[float], objetivo: float) -> Optional[int]:
    for ano, acc in enumerate(acumulados):
        if acc >= objetivo:
            return ano
    return None


# ==========================================================
# Flujo mensual, VPL y payback por opción
# ==========================================================

def _npv(rate: float, cashflows: Sequence[float]) -> float:
    return sum(cf / ((1 + rate) ** t) for t, cf in enumerate(cashflows))


def fluxo_economia_mensal(monthly_economy: float, cfg: Configuration) -> List[float]:
    """
    Economía mes a mes durante el horizonte, reajustada con la tasa mensual
    equivalente al reajuste anual (sin degradación ni tope de factura).
    """
    g = (1 + float(cfg.reajuste_tarifa_anual)) ** (1 / 12) - 1
    meses = int(cfg.horizonte_anos) * 12
    return [float(monthly_economy) * (1 + g) ** m for m in range(meses)]


def vpl_economia(investimento: float, monthly_economy: float, cfg: Configuration) -> float:
    """VPL = -investimento + economías mensuales descontadas a `taxa_desconto_vpl`."""
    flujo = [-float(investimento)] + fluxo_economia_mensal(monthly_economy, cfg)
    return _npv(float(cfg.taxa_desconto_vpl), flujo)


def payback_com_reajuste(custo: float, monthly_economy: float, cfg: Configuration) -> Optional[float]:
    """Años hasta que la economía acumulada cubre `custo`; None si no ocurre en el horizonte."""
    if monthly_economy <= 0:
        return None
    acumulado = 0.0
    for mes, economia in enumerate(fluxo_economia_mensal(monthly_economy, cfg), start=1):
        acumulado += economia
        if acumulado >= custo:
            return mes / 12.0
    return None


# ==========================================================
# Serie anual
# ==========================================================

def serie_anual(
    recommendation: Recommendation,
    current_tariff: float,
    cfg: Configuration,
    reajuste: Optional[float] = None,
) -> List[AnoProjecao]:
    """
    Año a año para el horizonte configurado:
      economía(año) = generación(año) x tarifa(año) x factor de compensación,
    con tope en la factura del cliente reajustada (si se conoce).
    `reajuste=0` da la serie de tarifa plana usada en los comparativos.
    """
    r = cfg.reajuste_tarifa_anual if reajuste is None else float(reajuste)
    conta = recommendation.current_bill

    serie: List[AnoProjecao] = []
    acumulado = 0.0
    for ano in range(int(cfg.horizonte_anos)):
        gen = geracao_anual(recommendation.monthly_generation_kwh, ano, cfg)
        tarifa = tarifa_do_ano(current_tariff, ano, r)
        economia = gen * tarifa * float(cfg.fator_compensacao)
        if conta is not None:
            economia = min(economia, float(conta) * 12.0 * (1 + r) ** ano)

        acumulado += economia
        serie.append(
            AnoProjecao(
                ano=ano,
                geracao_kwh=gen,
                tarifa=tarifa,
                economia_anual=economia,
                economia_acumulada=acumulado,
            )
        )
    return serie


# ==========================================================
# Proyección canónica
# ==========================================================

def project(recommendation: Recommendation, current_tariff: float, cfg: Configuration) -> LongTermProjection:
    valor = exigir_positivo(recommendation.system_value, "system_value")
    serie = serie_anual(recommendation, current_tariff, cfg)

    total = serie[-1].economia_acumulada if serie else 0.0
    horizonte = int(cfg.horizonte_anos)

    return LongTermProjection(
        total_savings_25_years=total,
        roi=(total - valor) / valor * 100.0,
        average_annual_savings=total / horizonte,
        crossover_year=ano_cruce([a.economia_acumulada for a in serie], valor),
    )
