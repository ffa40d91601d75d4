# core/rutas.py
from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Dict, Optional


def base_dir_seguro() -> Path:
    """Devuelve una base estable en Windows / Streamlit / CLI."""
    try:
        return Path(__file__).resolve().parents[1]
    except Exception:
        return Path(os.getcwd()).resolve()


def preparar_salida(nombre_carpeta: str = "salidas", base: Optional[Path] = None) -> Dict[str, str]:
    base = Path(base) if base else base_dir_seguro()
    out_dir = base / nombre_carpeta
    out_dir.mkdir(parents=True, exist_ok=True)

    return {
        "out_dir": str(out_dir),
        "charts_dir": str(out_dir / "charts"),
        "pdf_path": str(out_dir / "proposta_solar.pdf"),
    }


def money_BRL(x: float, dec: int = 2) -> str:
    """R$ 1.234,56"""
    if x is None or not math.isfinite(float(x)):
        return "R$ -"
    s = f"{abs(float(x)):,.{dec}f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"-R$ {s}" if x < 0 else f"R$ {s}"


def num(x: float, nd: int = 2) -> str:
    return f"{x:,.{nd}f}".replace(",", "X").replace(".", ",").replace("X", ".")


def pct(x: float, nd: int = 1) -> str:
    """Fracción -> '8,0%'."""
    return f"{num(float(x) * 100.0, nd)}%"


def texto_payback(anos: Optional[float]) -> str:
    """'3 anos e 4 meses'; None -> 'N/A' (economía no recupera la inversión)."""
    if anos is None or not math.isfinite(anos):
        return "N/A"

    meses_total = int(math.ceil(anos * 12 - 1e-9))
    a, m = divmod(meses_total, 12)
    if a == 0:
        return f"{meses_total} {'mês' if meses_total == 1 else 'meses'}"
    txt_a = f"{a} {'ano' if a == 1 else 'anos'}"
    if m == 0:
        return txt_a
    return f"{txt_a} e {m} {'mês' if m == 1 else 'meses'}"


_ROTULOS_VIABILIDADE = {
    "excellent": "Excelente - se paga sozinho",
    "good": "Bom - pequeno desembolso",
    "fair": "Regular - desembolso moderado",
    "poor": "Ruim - alto desembolso",
}


def rotulo_viabilidade(viabilidad: str) -> str:
    return _ROTULOS_VIABILIDADE.get(viabilidad, viabilidad)
