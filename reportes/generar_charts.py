# reportes/generar_charts.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import matplotlib
matplotlib.use("Agg")  # sin pantalla (CLI / streamlit / tests)
import matplotlib.pyplot as plt

from core.configuracion import Configuration
from core.modelo import ReverseCalcResult
from core.result_accessors import serie_comparativa

_COR_VIABILIDADE = {"excellent": "#1B7F3A", "good": "#1565C0", "fair": "#F9A825", "poor": "#C62828"}


def _mkdir_charts(out_dir: Optional[str]) -> Path:
    base = Path(out_dir) if out_dir else Path("salidas") / "charts"
    base.mkdir(parents=True, exist_ok=True)
    return base


def _plot_line(xs: List[int], ys: List[List[float]], labels: List[str], out_path: Path, *, ref: Optional[float] = None) -> None:
    plt.figure()
    for y, lab in zip(ys, labels):
        plt.plot(xs, y, marker="o", markersize=3, label=lab)
    if ref is not None:
        plt.axhline(ref, color="#C62828", linestyle="--", label="Valor do sistema")
    plt.xlabel("Ano")
    plt.ylabel("R$")
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()


def _plot_bar(xs: List[str], y: List[float], cores: List[str], out_path: Path) -> None:
    plt.figure()
    plt.bar(xs, y, color=cores)
    plt.axhline(0, color="black", linewidth=0.8)
    plt.xlabel("Parcelas")
    plt.ylabel("Fluxo mensal (R$)")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()


def generar_charts(
    result: ReverseCalcResult,
    current_tariff: float,
    cfg: Configuration,
    out_dir: Optional[str] = None,
) -> Dict[str, str]:
    """
    Genera 3 PNG:
      - fv_chart_acumulado.png (economía acumulada vs valor del sistema)
      - fv_chart_comparativo.png (con reajuste vs tarifa plana)
      - fv_chart_fluxo.png (flujo mensual por plazo)
    """
    base = _mkdir_charts(out_dir)
    serie = serie_comparativa(result, current_tariff, cfg)
    anos = [int(r["ano"]) + 1 for r in serie]

    p1 = base / "fv_chart_acumulado.png"
    _plot_line(
        anos,
        [[r["acumulado_reajuste"] for r in serie]],
        ["Economia acumulada"],
        p1,
        ref=result.recommendation.system_value,
    )

    p2 = base / "fv_chart_comparativo.png"
    _plot_line(
        anos,
        [[r["acumulado_reajuste"] for r in serie], [r["acumulado_plano"] for r in serie]],
        ["Com reajuste tarifário", "Tarifa constante"],
        p2,
    )

    opciones = result.financing_options
    p3 = base / "fv_chart_fluxo.png"
    _plot_bar(
        [f"{o.installments}x" for o in opciones],
        [o.monthly_cashflow for o in opciones],
        [_COR_VIABILIDADE.get(o.viability, "#C62828") for o in opciones],
        p3,
    )

    return {
        "chart_acumulado": str(p1),
        "chart_comparativo": str(p2),
        "chart_fluxo": str(p3),
    }
