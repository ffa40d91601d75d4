# ui/resultados.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from core.configuracion import Configuration
from core.escenarios import CenariosDimensionamento
from core.modelo import ReverseCalcResult
from core.result_accessors import economia_lcoe_pct, top_viable_options
from core.rutas import money_BRL, num, pct, rotulo_viabilidade, texto_payback


# ==========================================================
# Filas / KPIs (sin streamlit, testeables)
# ==========================================================
def kpis_resultado(result: ReverseCalcResult, current_tariff: float) -> Dict[str, str]:
    rec = result.recommendation
    lp = result.long_term_projection
    return {
        "Potência recomendada": f"{num(rec.power_kwp, 2)} kWp",
        "Geração estimada": f"{num(rec.monthly_generation_kwh, 0)} kWh/mês",
        "Economia mensal": money_BRL(rec.monthly_economy),
        "Valor do sistema": money_BRL(rec.system_value),
        "Economia em 25 anos": money_BRL(lp.total_savings_25_years),
        "ROI": f"{num(lp.roi, 1)}%",
        "LCOE": f"{money_BRL(result.lcoe, 3)}/kWh ({num(economia_lcoe_pct(current_tariff, result.lcoe), 0)}% abaixo da tarifa)",
    }


def filas_financiamiento(result: ReverseCalcResult) -> List[Dict[str, Any]]:
    return [
        {
            "Parcelas": f"{o.installments}x",
            "Taxa a.m.": pct(o.monthly_rate, 2),
            "Parcela": money_BRL(o.installment_value),
            "Fluxo mensal": money_BRL(o.monthly_cashflow),
            "Total pago": money_BRL(o.total_paid),
            "Payback": texto_payback(o.payback_years),
            "VPL": money_BRL(o.npv),
            "Viabilidade": rotulo_viabilidade(o.viability),
        }
        for o in result.financing_options
    ]


def filas_contado(result: ReverseCalcResult) -> List[List[str]]:
    c = result.cash_option
    return [
        ["Valor original", money_BRL(c.original_value)],
        [f"Desconto ({pct(c.discount_percent, 0)})", money_BRL(c.discount_savings)],
        ["Valor à vista", money_BRL(c.discounted_value)],
        ["Payback", texto_payback(c.payback_years)],
        ["VPL", money_BRL(c.npv)],
    ]


def filas_cenarios(cenarios: CenariosDimensionamento) -> List[Dict[str, Any]]:
    out = []
    for nombre, rec in (
        ("Parcela = economia", cenarios.fluxo_zero),
        (f"Sobra {money_BRL(cenarios.folga_alvo)}/mês", cenarios.fluxo_positivo),
    ):
        out.append({
            "Cenário": nombre,
            "Potência": f"{num(rec.power_kwp, 2)} kWp",
            "Economia mensal": money_BRL(rec.monthly_economy),
            "Valor do sistema": money_BRL(rec.system_value),
        })
    return out


def dataframe_financiamiento(result: ReverseCalcResult) -> pd.DataFrame:
    return pd.DataFrame(filas_financiamiento(result))


def avisos_resultado(result: ReverseCalcResult) -> List[str]:
    out: List[str] = []
    rec = result.recommendation
    if rec.budget_constrained:
        out.append(
            "O orçamento informado fica abaixo do sistema mínimo; "
            f"mostramos o menor sistema disponível ({num(rec.power_kwp, 2)} kWp)."
        )
    if not top_viable_options(result):
        out.append("Nenhuma opção de financiamento se paga com a economia estimada.")
    if result.long_term_projection.crossover_year is None:
        out.append("A economia acumulada não cobre o valor do sistema dentro do horizonte da projeção.")
    return out


# ==========================================================
# Render
# ==========================================================
def _img_si_existe(path: Optional[str], caption: str) -> None:
    if path and Path(path).exists():
        st.image(path, caption=caption, use_container_width=True)


def render_resultado(
    result: ReverseCalcResult,
    current_tariff: float,
    cfg: Configuration,
    charts: Optional[Dict[str, str]] = None,
    cenarios: Optional[CenariosDimensionamento] = None,
) -> None:
    for aviso in avisos_resultado(result):
        st.warning(aviso)

    kpis = kpis_resultado(result, current_tariff)
    cols = st.columns(4)
    for i, (k, v) in enumerate(kpis.items()):
        cols[i % 4].metric(k, v)

    st.subheader("À vista")
    st.table(pd.DataFrame(filas_contado(result), columns=["Item", "Valor"]))

    st.subheader("Financiamento")
    st.dataframe(dataframe_financiamiento(result), use_container_width=True, hide_index=True)

    cruce = result.long_term_projection.crossover_year
    st.caption(
        f"Reajuste tarifário de {pct(cfg.reajuste_tarifa_anual, 0)} a.a. • "
        + (f"Sistema se paga no ano {cruce + 1}" if cruce is not None else "Sem retorno no horizonte")
    )

    if cenarios is not None:
        st.subheader("Outros tamanhos")
        st.dataframe(pd.DataFrame(filas_cenarios(cenarios)), use_container_width=True, hide_index=True)

    charts = charts or {}
    c1, c2 = st.columns(2)
    with c1:
        _img_si_existe(charts.get("chart_acumulado"), "Economia acumulada x valor do sistema")
    with c2:
        _img_si_existe(charts.get("chart_fluxo"), "Fluxo mensal por prazo")
    _img_si_existe(charts.get("chart_comparativo"), "Com reajuste x tarifa constante")
