# reportes/generar_pdf_profesional.py
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer

from core.configuracion import Configuration
from core.modelo import ReverseCalcResult
from core.result_accessors import economia_lcoe_pct
from core.rutas import money_BRL, num, pct, rotulo_viabilidade, texto_payback

from .helpers_pdf import box_paragraph, section_bar, tabla_2cols, tabla_opcoes
from .styles import pdf_palette, pdf_styles


def _getcampo(x: Any, k: str, default: Any = "") -> Any:
    if isinstance(x, dict):
        return x.get(k, default)
    return getattr(x, k, default)


def _ensure_pdf_path(paths: Dict[str, Any]) -> str:
    if not isinstance(paths, dict):
        raise TypeError("`paths` debe ser dict y contener 'pdf_path'.")

    pdf_path = paths.get("pdf_path")
    if not pdf_path:
        out_dir = paths.get("out_dir") or "salidas"
        pdf_path = str(Path(out_dir) / "proposta_solar.pdf")
        paths["pdf_path"] = pdf_path

    p = Path(str(pdf_path))
    p.parent.mkdir(parents=True, exist_ok=True)
    return str(p)


# ---------------------------
# Bloques
# ---------------------------
def _bloque_cliente(datos, result, current_tariff, pal, styles, content_w) -> List[Any]:
    rec = result.recommendation
    story: List[Any] = [
        Paragraph("Proposta de Energia Solar", styles["H1b"]),
        Paragraph(f"Emitida em {date.today().strftime('%d/%m/%Y')}", styles["Small"]),
        Spacer(1, 8),
        section_bar("Cliente", pal, content_w),
        Spacer(1, 4),
    ]
    rows = [
        ["Cliente", str(_getcampo(datos, "cliente", "") or "-")],
        ["Localização", str(_getcampo(datos, "ubicacion", "") or "-")],
        ["Tarifa atual", f"{money_BRL(current_tariff, 3)}/kWh"],
    ]
    if rec.client_budget is not None:
        rows.append(["Orçamento mensal informado", money_BRL(rec.client_budget)])
    if rec.current_bill is not None:
        rows.append(["Conta de luz atual", money_BRL(rec.current_bill)])
    story.append(tabla_2cols(["Dado", "Valor"], rows, content_w, pal))
    story.append(Spacer(1, 10))
    return story


def _bloque_sistema(result, pal, content_w) -> List[Any]:
    rec = result.recommendation
    rows = [
        ["Potência recomendada", f"{num(rec.power_kwp, 2)} kWp"],
        ["Geração estimada", f"{num(rec.monthly_generation_kwh, 0)} kWh/mês"],
        ["Economia mensal estimada", money_BRL(rec.monthly_economy)],
        ["Valor do sistema", money_BRL(rec.system_value)],
    ]
    story: List[Any] = [section_bar("Sistema recomendado", pal, content_w), Spacer(1, 4)]
    story.append(tabla_2cols(["Indicador", "Valor"], rows, content_w, pal))
    if rec.budget_constrained:
        story.append(Spacer(1, 4))
        story.append(box_paragraph(
            "<b>Atenção:</b> o orçamento informado fica abaixo do menor sistema viável; "
            "a proposta usa a potência mínima.",
            pal, content_w,
        ))
    story.append(Spacer(1, 10))
    return story


def _bloque_pagamento(result, cfg, pal, content_w) -> List[Any]:
    cash = result.cash_option
    story: List[Any] = [section_bar(f"À vista com {pct(cash.discount_percent, 0)} de desconto", pal, content_w), Spacer(1, 4)]
    rows = [
        ["Valor original", money_BRL(cash.original_value)],
        ["Valor com desconto", money_BRL(cash.discounted_value)],
        ["Economia no desconto", money_BRL(cash.discount_savings)],
        ["Payback", texto_payback(cash.payback_years)],
        [f"VPL ({cfg.horizonte_anos} anos)", money_BRL(cash.npv)],
    ]
    story.append(tabla_2cols(["Item", "Valor"], rows, content_w, pal, highlight_row=1))
    story.append(Spacer(1, 10))

    story.append(section_bar("Opções de financiamento", pal, content_w))
    story.append(Spacer(1, 4))
    header = ["Parcelas", "Taxa a.m.", "Parcela", "Fluxo mensal", "Payback", "VPL", "Viabilidade"]
    rows = [
        [
            f"{o.installments}x",
            pct(o.monthly_rate, 2),
            money_BRL(o.installment_value),
            money_BRL(o.monthly_cashflow),
            texto_payback(o.payback_years),
            money_BRL(o.npv, 0),
            rotulo_viabilidade(o.viability).split(" - ")[0],
        ]
        for o in result.financing_options
    ]
    story.append(tabla_opcoes(header, rows, [o.viability for o in result.financing_options], content_w, pal))
    story.append(Spacer(1, 10))
    return story


def _bloque_projecao(result, current_tariff, cfg, paths, pal, styles, content_w) -> List[Any]:
    lp = result.long_term_projection
    cruce = "não atingido" if lp.crossover_year is None else f"ano {lp.crossover_year + 1}"
    rows = [
        [f"Economia total em {cfg.horizonte_anos} anos", money_BRL(lp.total_savings_25_years)],
        ["Média anual", money_BRL(lp.average_annual_savings)],
        ["ROI", f"{num(lp.roi, 1)}%"],
        ["Retorno do investimento", cruce],
        ["Custo da energia solar (LCOE)", f"{money_BRL(result.lcoe, 3)}/kWh"],
        ["Mais barato que a distribuidora", f"{num(economia_lcoe_pct(current_tariff, result.lcoe), 1)}%"],
    ]
    story: List[Any] = [section_bar("Projeção de longo prazo", pal, content_w), Spacer(1, 4)]
    story.append(tabla_2cols(["Indicador", "Valor"], rows, content_w, pal))
    story.append(Spacer(1, 6))

    chart = (paths or {}).get("chart_acumulado")
    if chart and Path(str(chart)).exists():
        story.append(Paragraph("Economia acumulada x valor do sistema", styles["H2b"]))
        img = Image(str(chart), width=content_w, height=content_w * 0.6)
        img.hAlign = "CENTER"
        story.append(img)

    story.append(Spacer(1, 6))
    story.append(box_paragraph(
        f"Valores estimados considerando reajuste tarifário de {pct(cfg.reajuste_tarifa_anual)} a.a. "
        f"e degradação dos módulos de {pct(cfg.degradacao_anual)} a.a.",
        pal, content_w, font_size=8,
    ))
    return story


def generar_pdf_profesional(
    result: ReverseCalcResult,
    datos: Any,
    current_tariff: float,
    cfg: Configuration,
    paths: Optional[Dict[str, Any]] = None,
) -> str:
    """
    `result` = salida única de core.orquestador.compute (no se recalcula nada aquí).
    `datos` = dict u objeto con cliente/ubicacion.
    `paths` = dict de rutas (pdf_path, chart_acumulado, ...).
    """
    pal = pdf_palette()
    styles = pdf_styles()
    paths = paths if paths is not None else {}
    pdf_path = _ensure_pdf_path(paths)

    doc = SimpleDocTemplate(str(pdf_path), pagesize=A4)
    content_w = doc.width

    story: List[Any] = []
    story += _bloque_cliente(datos, result, current_tariff, pal, styles, content_w)
    story += _bloque_sistema(result, pal, content_w)
    story += _bloque_pagamento(result, cfg, pal, content_w)
    story += _bloque_projecao(result, current_tariff, cfg, paths, pal, styles, content_w)

    doc.build(story)
    return str(pdf_path)
