# calcular.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .configuracion import cargar_configuracion, configuracion_desde_hsp
from .errores import CalculoError
from .irradiancia import hsp_por_estado
from .modelo import ReverseCalcResult
from .orquestador import compute
from .rutas import money_BRL, num, preparar_salida, rotulo_viabilidade, texto_payback

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="calculadora-fv",
        description="Calculadora solar reversa: orçamento mensal -> sistema FV e formas de pagamento.",
    )
    ap.add_argument("--orcamento", type=float, required=True, help="Quanto o cliente pode pagar por mês (R$).")
    ap.add_argument("--tarifa", type=float, required=True, help="Tarifa de energia (R$/kWh).")
    ap.add_argument("--estado", default=None, help="UF para ajustar a irradiação (ex.: MG).")
    ap.add_argument("--conta", type=float, default=None, help="Conta de luz atual (R$/mês); limita a economia.")
    ap.add_argument("--config", type=Path, default=None, help="YAML de parâmetros (padrão: config/parametros_financieros.yaml).")
    ap.add_argument("--pdf", action="store_true", help="Gera gráficos e proposta PDF em ./salidas.")
    ap.add_argument("--json", action="store_true", help="Imprime o resultado completo em JSON.")
    ap.add_argument("--verbose", action="store_true")
    return ap


def resumen_texto(result: ReverseCalcResult) -> str:
    rec = result.recommendation
    cash = result.cash_option
    lp = result.long_term_projection

    lineas = [
        f"Sistema: {num(rec.power_kwp, 2)} kWp | {num(rec.monthly_generation_kwh, 0)} kWh/mês",
        f"Economia mensal: {money_BRL(rec.monthly_economy)} | Valor: {money_BRL(rec.system_value)}",
        f"À vista: {money_BRL(cash.discounted_value)} | Payback: {texto_payback(cash.payback_years)} | VPL: {money_BRL(cash.npv)}",
        "Financiamento:",
    ]
    lineas += [
        f"  {o.installments:>3}x  {money_BRL(o.installment_value):>14}  fluxo {money_BRL(o.monthly_cashflow):>12}  {rotulo_viabilidade(o.viability)}"
        for o in result.financing_options
    ]
    lineas.append(
        f"Economia total: {money_BRL(lp.total_savings_25_years)} | ROI {num(lp.roi, 1)}% | LCOE {money_BRL(result.lcoe, 3)}/kWh"
    )
    if rec.budget_constrained:
        lineas.append("Aviso: orçamento abaixo do sistema mínimo.")
    return "\n".join(lineas)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = cargar_configuracion(args.config)
        if args.estado:
            cfg = configuracion_desde_hsp(cfg, hsp_por_estado(args.estado))
        result = compute(args.orcamento, args.tarifa, cfg, args.conta)
    except (CalculoError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(resumen_texto(result))

    if args.pdf:
        from reportes.generar_charts import generar_charts
        from reportes.generar_pdf_profesional import generar_pdf_profesional

        paths = preparar_salida("salidas")
        paths.update(generar_charts(result, args.tarifa, cfg, paths["charts_dir"]))
        pdf = generar_pdf_profesional(result, {"ubicacion": args.estado or ""}, args.tarifa, cfg, paths)
        logger.debug("PDF generado en %s", pdf)
        print(pdf)

    return 0


if __name__ == "__main__":
    sys.exit(main())
