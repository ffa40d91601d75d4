# reportes/compartir.py
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from core.configuracion import Configuration
from core.modelo import ReverseCalcResult
from core.result_accessors import top_viable_options
from core.rutas import money_BRL, num, pct, texto_payback

_SEP = "━━━━━━━━━━━━━━━━━━━━━━"


def _solo_digitos(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def gerar_link_whatsapp(phone: Optional[str] = None, message: Optional[str] = None) -> str:
    """wa.me con DDI 55 cuando el número no lo trae (<= 11 dígitos)."""
    limpio = _solo_digitos(phone)
    if limpio:
        completo = f"55{limpio}" if len(limpio) <= 11 else limpio
        url = f"https://wa.me/{completo}"
        return f"{url}?text={quote(message, safe='')}" if message else url

    if message:
        return f"https://wa.me/?text={quote(message, safe='')}"
    return "https://wa.me/"


def formatar_telefone(phone: Optional[str]) -> str:
    """(XX) XXXXX-XXXX / (XX) XXXX-XXXX; cualquier otro formato se devuelve igual."""
    if not phone:
        return ""
    d = _solo_digitos(phone)
    if len(d) == 11:
        return f"({d[:2]}) {d[2:7]}-{d[7:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return phone


def _linhas_financiamento(result: ReverseCalcResult) -> str:
    top = top_viable_options(result, 3)
    if top:
        return "\n".join(
            f"   • {o.installments}x: {money_BRL(o.installment_value)}/mês "
            f"(fluxo: {'+' if o.monthly_cashflow >= 0 else ''}{money_BRL(o.monthly_cashflow)})"
            for o in top
        )
    return "\n".join(
        f"   • {o.installments}x: {money_BRL(o.installment_value)}/mês"
        for o in result.financing_options[:3]
    )


def gerar_texto_resumo(result: ReverseCalcResult, client_budget: float, cfg: Configuration) -> str:
    """
    Texto para WhatsApp / área de transferência. Solo formatea: todos los números
    vienen del resultado, y la nota de reajuste usa la tasa configurada.
    """
    rec = result.recommendation
    cash = result.cash_option
    lp = result.long_term_projection

    return "\n".join([
        "📊 *ANÁLISE SOLAR PERSONALIZADA*",
        "",
        f"💰 *Orçamento informado:* {money_BRL(client_budget)}/mês",
        "",
        _SEP,
        "",
        "🔋 *SISTEMA RECOMENDADO*",
        f"• Potência: {num(rec.power_kwp, 2)} kWp",
        f"• Geração estimada: {num(rec.monthly_generation_kwh, 0)} kWh/mês",
        f"• Economia mensal: ~{money_BRL(rec.monthly_economy)}",
        "",
        _SEP,
        "",
        f"💵 *OPÇÃO À VISTA ({pct(cash.discount_percent, 0)} desconto)*",
        f"• De: {money_BRL(cash.original_value)}",
        f"• Por: *{money_BRL(cash.discounted_value)}*",
        f"• Economia: {money_BRL(cash.discount_savings)}",
        f"• Payback: {texto_payback(cash.payback_years)}",
        "",
        _SEP,
        "",
        "💳 *OPÇÕES DE FINANCIAMENTO*",
        _linhas_financiamento(result),
        "",
        _SEP,
        "",
        f"📈 *PROJEÇÃO {cfg.horizonte_anos} ANOS*",
        f"• Economia total: *{money_BRL(lp.total_savings_25_years)}*",
        f"• ROI: {num(lp.roi, 1)}%",
        f"• Média anual: {money_BRL(lp.average_annual_savings)}",
        "",
        _SEP,
        "",
        f"_Valores estimados considerando reajuste energético de {pct(cfg.reajuste_tarifa_anual, 0)} a.a._",
        "_A melhor opção depende do seu perfil e disponibilidade de capital._",
    ])
