# reportes/helpers_pdf.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from core.modelo import EXCELLENT, FAIR, GOOD, POOR

_COR_VIABILIDADE = {EXCELLENT: "OK", GOOD: "GOOD", FAIR: "WARN", POOR: "BAD"}


def section_bar(texto: str, pal: Dict[str, Any], content_w: float) -> Table:
    style = ParagraphStyle(
        name="section_bar",
        fontName="Helvetica-Bold",
        fontSize=10,
        textColor=colors.white,
        leftIndent=6,
    )
    t = Table([[Paragraph(texto, style)]], colWidths=[content_w])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), pal["PRIMARY"]),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    return t


def make_table(data: List[List[Any]], content_w: float, *, ratios=None, repeatRows: int = 0) -> Table:
    """Tabla con anchos proporcionales."""
    if ratios is None:
        ratios = [1] * len(data[0])
    total = float(sum(ratios))
    col_widths = [content_w * (float(r) / total) for r in ratios]
    return Table(data, colWidths=col_widths, repeatRows=repeatRows)


def table_style_uniform(pal: Dict[str, Any], *, font_header: int = 9, font_body: int = 9) -> TableStyle:
    return TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), font_header),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("BACKGROUND", (0, 0), (-1, 0), pal["PRIMARY"]),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), font_body),
        ("GRID", (0, 0), (-1, -1), 0.6, pal["BORDER"]),
        ("BACKGROUND", (0, 1), (-1, -1), pal["SOFT"]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ])


def tabla_2cols(header, rows, content_w, pal, highlight_row: Optional[int] = None) -> Table:
    t = make_table([header] + rows, content_w, ratios=[2.8, 1.2], repeatRows=1)
    t.setStyle(table_style_uniform(pal, font_header=10))
    t.setStyle(TableStyle([("ALIGN", (1, 1), (1, -1), "RIGHT")]))
    if highlight_row is not None:
        r = highlight_row + 1
        t.setStyle(TableStyle([
            ("BACKGROUND", (0, r), (-1, r), pal["OK"]),
            ("TEXTCOLOR", (0, r), (-1, r), colors.white),
            ("FONTNAME", (0, r), (-1, r), "Helvetica-Bold"),
        ]))
    return t


def tabla_opcoes(header, rows, viabilidades: List[str], content_w, pal) -> Table:
    """Tabla de financiamiento; la última columna se pinta según la viabilidad."""
    t = make_table([header] + rows, content_w, repeatRows=1)
    t.setStyle(table_style_uniform(pal))
    t.setStyle(TableStyle([("ALIGN", (1, 1), (-1, -1), "RIGHT")]))
    for i, v in enumerate(viabilidades, start=1):
        t.setStyle(TableStyle([
            ("BACKGROUND", (-1, i), (-1, i), pal[_COR_VIABILIDADE.get(v, "BAD")]),
            ("TEXTCOLOR", (-1, i), (-1, i), colors.white),
        ]))
    return t


def box_paragraph(html_text: str, pal: Dict[str, Any], content_w: float, *, font_size=10) -> Table:
    style = ParagraphStyle(name="box", fontName="Helvetica", fontSize=font_size, leading=font_size + 2)
    t = Table([[Paragraph(html_text, style)]], colWidths=[content_w])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), pal.get("SOFT")),
        ("BOX", (0, 0), (-1, -1), 0.8, pal.get("BORDER")),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("RIGHTPADDING", (0, 0), (-1, -1), 8),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return t
