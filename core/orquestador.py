# core/orquestador.py
from __future__ import annotations

import logging
from typing import Optional

from .configuracion import Configuration
from .contado import build_cash_option
from .finanzas_lp import project
from .financiamiento import generate_options
from .lcoe import compute_lcoe
from .modelo import Recommendation, ReverseCalcResult
from .sizing import recomendacion_para_potencia, solve
from .validacion import exigir_positivo, validar_configuracion, validar_entradas

logger = logging.getLogger(__name__)


# ==========================================================
# Armado del resultado
# ==========================================================

def _armar_resultado(rec: Recommendation, current_tariff: float, cfg: Configuration) -> ReverseCalcResult:
    # contado y financiamiento no dependen entre sí
    cash = build_cash_option(rec, cfg)
    opciones = tuple(generate_options(rec, cfg))
    proyeccion = project(rec, current_tariff, cfg)
    lcoe = compute_lcoe(rec, cfg)

    logger.debug(
        "Resultado: %.2f kWp, valor=%.2f, economía=%.2f, cruce=%s",
        rec.power_kwp, rec.system_value, rec.monthly_economy, proyeccion.crossover_year,
    )

    return ReverseCalcResult(
        recommendation=rec,
        cash_option=cash,
        financing_options=opciones,
        long_term_projection=proyeccion,
        lcoe=lcoe,
    )


# ==========================================================
# ENTRYPOINT ÚNICO (calculadora reversa)
# ==========================================================

def compute(
    client_budget: float,
    current_tariff: float,
    config: Configuration,
    current_bill: Optional[float] = None,
) -> ReverseCalcResult:
    """
    Presupuesto mensual del cliente -> sistema recomendado, opción de contado,
    opciones de financiamiento, proyección de largo plazo y LCOE.
    Valida todo al inicio; nunca devuelve resultados parciales.
    """
    validar_entradas(client_budget, current_tariff, current_bill)
    validar_configuracion(config)

    rec = solve(client_budget, current_tariff, config, current_bill)
    return _armar_resultado(rec, float(current_tariff), config)


def compute_for_system(
    power_kwp: float,
    current_tariff: float,
    config: Configuration,
    current_bill: Optional[float] = None,
) -> ReverseCalcResult:
    """Mismo resultado partiendo de una potencia ya definida (sin presupuesto)."""
    kwp = exigir_positivo(power_kwp, "power_kwp")
    tarifa = exigir_positivo(current_tariff, "current_tariff")
    conta = None if current_bill is None else exigir_positivo(current_bill, "current_bill")
    validar_configuracion(config)

    rec = recomendacion_para_potencia(kwp, tarifa, config, current_bill=conta)
    return _armar_resultado(rec, tarifa, config)
