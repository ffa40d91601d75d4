# core/modelo.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

# Niveles de viabilidad, del mejor al peor
EXCELLENT = "excellent"
GOOD = "good"
FAIR = "fair"
POOR = "poor"

VIABILIDADES: Tuple[str, ...] = (EXCELLENT, GOOD, FAIR, POOR)


def rango_viabilidad(viabilidad: str) -> int:
    """0 = mejor nivel. Sirve para ordenar sin reescribir la tabla en cada consumidor."""
    return VIABILIDADES.index(viabilidad)


# =============================
# Recomendación (sizing)
# =============================

@dataclass(frozen=True)
class Recommendation:
    power_kwp: float
    monthly_generation_kwh: float     # = power_kwp * rendimiento
    monthly_economy: float            # R$/mes, nunca mayor que la factura actual
    system_value: float               # = power_kwp * cost_per_kwp
    cost_per_kwp: float               # costo efectivo aplicado (R$/kWp)
    budget_constrained: bool = False  # presupuesto por debajo del piso
    client_budget: Optional[float] = None
    current_bill: Optional[float] = None


# =============================
# Opciones de pago
# =============================

@dataclass(frozen=True)
class CashOption:
    original_value: float
    discount_percent: float           # fracción (0.05 = 5%)
    discounted_value: float
    discount_savings: float
    payback_years: Optional[float]    # None = no recuperable (economía <= 0)
    npv: float                        # VPL del valor con descuento en el horizonte


@dataclass(frozen=True)
class FinancingOption:
    installments: int
    monthly_rate: float
    installment_value: float
    monthly_cashflow: float           # economía - parcela (con signo)
    viability: str
    total_paid: float
    total_interest: float
    payback_years: Optional[float]    # sobre total_paid, con reajuste; None = no recupera
    npv: float                        # VPL tomando total_paid como inversión


# =============================
# Proyección largo plazo
# =============================

@dataclass(frozen=True)
class AnoProjecao:
    ano: int                          # 0 = primer año de operación
    geracao_kwh: float                # generación anual
    tarifa: float                     # R$/kWh en ese año
    economia_anual: float
    economia_acumulada: float


@dataclass(frozen=True)
class LongTermProjection:
    total_savings_25_years: float
    roi: float                        # %
    average_annual_savings: float
    crossover_year: Optional[int]     # None = no cruza dentro del horizonte


# =============================
# Resultado agregado
# =============================

@dataclass(frozen=True)
class ReverseCalcResult:
    recommendation: Recommendation
    cash_option: CashOption
    financing_options: Tuple[FinancingOption, ...]
    long_term_projection: LongTermProjection
    lcoe: float                       # R$/kWh

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["financing_options"] = list(d["financing_options"])
        return d
