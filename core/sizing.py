# core/sizing.py
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from .configuracion import Configuration, PrazoFinanciamento
from .financiamiento import calcular_parcela, valor_presente_maximo
from .modelo import Recommendation
from .validacion import exigir_positivo

logger = logging.getLogger(__name__)

_TOL_CENTAVO = 0.01
_MAX_ITER_BISECCION = 200


# ==========================================================
# Helpers de costo / generación
# ==========================================================

def prazo_referencia(cfg: Configuration) -> PrazoFinanciamento:
    """
    Plazo "representativo" con el que se interpreta el presupuesto mensual.
    Sin prazo_referencia_meses configurado: mediana inferior de los plazos ofrecidos.
    """
    plazos = cfg.prazos_ordenados()
    if cfg.prazo_referencia_meses is not None:
        return PrazoFinanciamento(cfg.prazo_referencia_meses, cfg.taxa_do_prazo(cfg.prazo_referencia_meses))
    return plazos[(len(plazos) - 1) // 2]


def valor_sistema(power_kwp: float, cfg: Configuration) -> float:
    """Costo total del sistema; con faixas_custo se cobra por tramos marginales."""
    kwp = float(power_kwp)
    if not cfg.faixas_custo:
        return kwp * float(cfg.custo_kwp)

    total = 0.0
    anterior = 0.0
    for f in cfg.faixas_custo:
        tope = math.inf if f.ate_kwp is None else float(f.ate_kwp)
        tramo = min(kwp, tope) - anterior
        if tramo <= 0:
            break
        total += tramo * float(f.custo_kwp)
        anterior = tope

    # Más allá del último límite se mantiene el costo del último tramo
    if kwp > anterior:
        total += (kwp - anterior) * float(cfg.faixas_custo[-1].custo_kwp)
    return total


def custo_efetivo_kwp(power_kwp: float, cfg: Configuration) -> float:
    if not cfg.faixas_custo:
        return float(cfg.custo_kwp)
    if power_kwp <= 0:
        return float(cfg.faixas_custo[0].custo_kwp)
    return valor_sistema(power_kwp, cfg) / float(power_kwp)


def economia_mensal(
    monthly_generation_kwh: float,
    current_tariff: float,
    cfg: Configuration,
    current_bill: Optional[float] = None,
) -> float:
    """Economía = generación x tarifa x factor Lei 14.300, tope en la factura actual."""
    e = float(monthly_generation_kwh) * float(current_tariff) * float(cfg.fator_compensacao)
    if current_bill is not None:
        e = min(e, float(current_bill))
    return e


def redondear_potencia(power_kwp: float, cfg: Configuration) -> float:
    """Hacia abajo al incremento de módulo (o a 0.01 kWp)."""
    inc = float(cfg.incremento_modulo_kwp or 0.0)
    if inc > 0:
        return round(math.floor(power_kwp / inc + 1e-9) * inc, 6)
    return math.floor(power_kwp * 100 + 1e-9) / 100


def recomendacion_para_potencia(
    power_kwp: float,
    current_tariff: float,
    cfg: Configuration,
    *,
    current_bill: Optional[float] = None,
    client_budget: Optional[float] = None,
    budget_constrained: bool = False,
) -> Recommendation:
    kwp = float(power_kwp)
    custo = custo_efetivo_kwp(kwp, cfg)
    geracao = kwp * float(cfg.rendimento_kwh_kwp_mes)
    return Recommendation(
        power_kwp=kwp,
        monthly_generation_kwh=geracao,
        monthly_economy=economia_mensal(geracao, current_tariff, cfg, current_bill),
        system_value=kwp * custo,
        cost_per_kwp=custo,
        budget_constrained=budget_constrained,
        client_budget=client_budget,
        current_bill=current_bill,
    )


# ==========================================================
# Inversión presupuesto -> potencia
# ==========================================================

def _potencia_por_biseccion(budget: float, plazo: PrazoFinanciamento, cfg: Configuration) -> Optional[float]:
    """
    Mayor potencia cuya parcela cabe en el presupuesto cuando el valor no es lineal
    (faixas de costo). Dominio monótono [piso, cota superior]. None si ni el piso cabe.
    """
    def parcela(kwp: float) -> float:
        return calcular_parcela(valor_sistema(kwp, cfg), plazo.taxa_mensal, plazo.meses)

    lo = float(cfg.potencia_minima_kwp)
    if parcela(lo) > budget + _TOL_CENTAVO:
        return None

    # Con tasa >= 0 el valor financiable nunca supera parcela * n
    custo_min = min(float(f.custo_kwp) for f in cfg.faixas_custo)
    hi = max(lo, budget * plazo.meses / custo_min)

    for i in range(_MAX_ITER_BISECCION):
        mid = (lo + hi) / 2
        p = parcela(mid)
        if abs(p - budget) < _TOL_CENTAVO:
            logger.debug("Bisección convergió en %d iteraciones: %.4f kWp", i + 1, mid)
            return mid
        if p < budget:
            lo = mid
        else:
            hi = mid
        if hi - lo < 1e-9:
            break
    return lo


def potencia_implicita(budget: float, cfg: Configuration) -> float:
    """Potencia sin redondeo ni piso. 0.0 si el presupuesto no alcanza el piso (solo con faixas)."""
    plazo = prazo_referencia(cfg)
    if cfg.faixas_custo:
        kwp = _potencia_por_biseccion(budget, plazo, cfg)
        return 0.0 if kwp is None else kwp
    valor_max = valor_presente_maximo(budget, plazo.taxa_mensal, plazo.meses)
    return valor_max / float(cfg.custo_kwp)


def aplicar_piso(power_kwp: float, cfg: Configuration) -> Tuple[float, bool]:
    """
    Piso sobre la potencia implícita (antes de redondear): debajo del piso se devuelve
    el piso marcado como limitado. Encima, se redondea sin bajar del piso.
    """
    piso = float(cfg.potencia_minima_kwp)
    if power_kwp < piso:
        return piso, True
    return max(piso, redondear_potencia(power_kwp, cfg)), False


def solve(
    client_budget: float,
    current_tariff: float,
    cfg: Configuration,
    current_bill: Optional[float] = None,
) -> Recommendation:
    budget = exigir_positivo(client_budget, "client_budget")
    tarifa = exigir_positivo(current_tariff, "current_tariff")
    conta = None if current_bill is None else exigir_positivo(current_bill, "current_bill")

    kwp_bruto = potencia_implicita(budget, cfg)
    kwp, limitado = aplicar_piso(kwp_bruto, cfg)

    logger.debug(
        "Sizing: presupuesto=%.2f plazo=%d kWp bruto=%.4f final=%.4f limitado=%s",
        budget, prazo_referencia(cfg).meses, kwp_bruto, kwp, limitado,
    )

    return recomendacion_para_potencia(
        kwp, tarifa, cfg,
        current_bill=conta,
        client_budget=budget,
        budget_constrained=limitado,
    )
