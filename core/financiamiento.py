# core/financiamiento.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .configuracion import Configuration
from .errores import DegenerateConfigurationError, InvalidInputError
from .finanzas_lp import payback_com_reajuste, vpl_economia
from .modelo import EXCELLENT, FAIR, GOOD, POOR, FinancingOption, Recommendation
from .validacion import exigir_positivo

logger = logging.getLogger(__name__)

# Tolerancia de un centavo al comparar parcela vs presupuesto
_CENTAVO = 0.005


# ==========================================================
# Fórmula Price (cuota fija)
# ==========================================================

def fator_anuidade(taxa_mensal: float, n: int) -> float:
    """Parcela por cada R$ 1 financiado."""
    if n <= 0:
        raise DegenerateConfigurationError("Plazo inválido.")
    r = float(taxa_mensal)
    if abs(r) < 1e-12:
        return 1.0 / n
    return r / (1 - (1 + r) ** (-n))


def calcular_parcela(principal: float, taxa_mensal: float, n: int) -> float:
    return float(principal) * fator_anuidade(taxa_mensal, n)


def valor_presente_maximo(parcela: float, taxa_mensal: float, n: int) -> float:
    """Inversa cerrada de calcular_parcela: cuánto se puede financiar con `parcela`."""
    return float(parcela) / fator_anuidade(taxa_mensal, n)


# ==========================================================
# Viabilidad
# ==========================================================

def limite_deficit(reais: float, pct: float, monthly_economy: float) -> float:
    return max(float(reais), float(pct) * max(float(monthly_economy), 0.0))


def classificar_viabilidade(
    monthly_cashflow: float,
    monthly_economy: float,
    cfg: Configuration,
    installment_value: Optional[float] = None,
    client_budget: Optional[float] = None,
) -> str:
    if monthly_cashflow >= 0:
        return EXCELLENT

    if client_budget is not None and installment_value is not None:
        if installment_value > client_budget + _CENTAVO:
            return POOR

    deficit = -monthly_cashflow
    if deficit <= limite_deficit(cfg.limite_bom_reais, cfg.limite_bom_pct, monthly_economy):
        return GOOD
    if deficit < limite_deficit(cfg.limite_regular_reais, cfg.limite_regular_pct, monthly_economy):
        return FAIR
    return POOR


# ==========================================================
# Generador de opciones
# ==========================================================

def generate_options(recommendation: Recommendation, cfg: Configuration) -> List[FinancingOption]:
    """Una opción por plazo configurado, en orden creciente de plazo."""
    plazos = cfg.prazos_ordenados()
    if not plazos:
        raise DegenerateConfigurationError("La tabla de plazos está vacía")

    principal = float(recommendation.system_value)
    economia = float(recommendation.monthly_economy)

    opciones: List[FinancingOption] = []
    for p in plazos:
        parcela = calcular_parcela(principal, p.taxa_mensal, p.meses)
        cashflow = economia - parcela
        total = parcela * p.meses

        opciones.append(
            FinancingOption(
                installments=p.meses,
                monthly_rate=p.taxa_mensal,
                installment_value=parcela,
                monthly_cashflow=cashflow,
                viability=classificar_viabilidade(
                    cashflow, economia, cfg,
                    installment_value=parcela,
                    client_budget=recommendation.client_budget,
                ),
                total_paid=total,
                total_interest=total - principal,
                payback_years=payback_com_reajuste(total, economia, cfg),
                npv=vpl_economia(total, economia, cfg),
            )
        )

    logger.debug("Opciones de financiamiento: %s", [(o.installments, o.viability) for o in opciones])
    return opciones


# ==========================================================
# Detección de tasa oculta (Newton-Raphson)
# ==========================================================

SEMAFORO_EXCELENTE = "excellent"
SEMAFORO_MEDIA = "average"
SEMAFORO_CARA = "expensive"


@dataclass(frozen=True)
class TaxaDetectada:
    taxa_mensal: float                # %
    taxa_anual: float                 # % efectiva
    semaforo: str
    juros_totais: float


def semaforo_taxa(taxa_mensal_pct: float) -> str:
    if taxa_mensal_pct < 1.5:
        return SEMAFORO_EXCELENTE
    if taxa_mensal_pct <= 2.0:
        return SEMAFORO_MEDIA
    return SEMAFORO_CARA


def detectar_taxa_mensal(
    valor_financiado: float,
    parcelas: int,
    valor_parcela: float,
    max_iter: int = 100,
    tol: float = 1e-7,
) -> TaxaDetectada:
    """
    Resuelve PV = PMT * (1 - (1+i)^-n) / i para i.
    Útil para comparar la propuesta de un banco contra la tabla de plazos.
    """
    pv = exigir_positivo(valor_financiado, "valor_financiado")
    pmt = exigir_positivo(valor_parcela, "valor_parcela")
    if int(parcelas) != parcelas or parcelas <= 0:
        raise InvalidInputError(f"parcelas debe ser entero > 0. Valor={parcelas!r}")
    n = int(parcelas)

    total = pmt * n
    if total <= pv:
        taxa = 0.0
    else:
        taxa = (total / pv - 1) / n
        for _ in range(max_iter):
            pot = (1 + taxa) ** (-n)
            f = pv - pmt * (1 - pot) / taxa
            df = pmt * ((1 - pot) / taxa - n * pot / (1 + taxa)) / taxa
            nueva = taxa - f / df
            if nueva <= 0:
                nueva = 0.001
            if abs(nueva - taxa) < tol:
                taxa = nueva
                break
            taxa = nueva

    taxa_pct = taxa * 100
    return TaxaDetectada(
        taxa_mensal=taxa_pct,
        taxa_anual=((1 + taxa) ** 12 - 1) * 100,
        semaforo=semaforo_taxa(taxa_pct),
        juros_totais=total - pv,
    )
