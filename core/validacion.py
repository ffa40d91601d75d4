# core/validacion.py
from __future__ import annotations

import math
from typing import Any, Optional

from .configuracion import Configuration
from .errores import DegenerateConfigurationError, InvalidInputError


def es_finito(x: Any) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False


def exigir_positivo(valor: Any, nombre: str) -> float:
    if isinstance(valor, bool) or not es_finito(valor):
        raise InvalidInputError(f"{nombre} debe ser un número finito. Valor={valor!r}")
    v = float(valor)
    if v <= 0:
        raise InvalidInputError(f"{nombre} debe ser > 0. Valor={valor!r}")
    return v


def validar_entradas(
    client_budget: Any,
    current_tariff: Any,
    current_bill: Optional[Any] = None,
) -> None:
    exigir_positivo(client_budget, "client_budget")
    exigir_positivo(current_tariff, "current_tariff")
    if current_bill is not None:
        exigir_positivo(current_bill, "current_bill")


def _cfg_num(valor: float, nombre: str) -> float:
    if not es_finito(valor):
        raise DegenerateConfigurationError(f"{nombre} debe ser finito. Valor={valor!r}")
    return float(valor)


def validar_configuracion(cfg: Configuration) -> None:
    if _cfg_num(cfg.rendimento_kwh_kwp_mes, "rendimento_kwh_kwp_mes") <= 0:
        raise DegenerateConfigurationError("rendimento_kwh_kwp_mes debe ser > 0")
    if _cfg_num(cfg.custo_kwp, "custo_kwp") <= 0:
        raise DegenerateConfigurationError("custo_kwp debe ser > 0")
    if not (0 <= _cfg_num(cfg.desconto_a_vista, "desconto_a_vista") < 1):
        raise DegenerateConfigurationError("desconto_a_vista debe estar en [0, 1)")
    if _cfg_num(cfg.reajuste_tarifa_anual, "reajuste_tarifa_anual") <= -1:
        raise DegenerateConfigurationError("reajuste_tarifa_anual debe ser > -1")
    if not (0 <= _cfg_num(cfg.degradacao_anual, "degradacao_anual") < 1):
        raise DegenerateConfigurationError("degradacao_anual debe estar en [0, 1)")
    if int(cfg.horizonte_anos) < 1:
        raise DegenerateConfigurationError("horizonte_anos debe ser >= 1")
    if not (0 < _cfg_num(cfg.fator_compensacao, "fator_compensacao") <= 1):
        raise DegenerateConfigurationError("fator_compensacao debe estar en (0, 1]")
    if _cfg_num(cfg.potencia_minima_kwp, "potencia_minima_kwp") <= 0:
        raise DegenerateConfigurationError("potencia_minima_kwp debe ser > 0")
    if _cfg_num(cfg.incremento_modulo_kwp, "incremento_modulo_kwp") < 0:
        raise DegenerateConfigurationError("incremento_modulo_kwp debe ser >= 0")
    if _cfg_num(cfg.taxa_desconto_vpl, "taxa_desconto_vpl") < 0:
        raise DegenerateConfigurationError("taxa_desconto_vpl debe ser >= 0")

    _validar_prazos(cfg)
    _validar_limites(cfg)
    _validar_faixas(cfg)

    if _cfg_num(cfg.folga_alvo_reais, "folga_alvo_reais") < 0 or _cfg_num(cfg.folga_alvo_pct, "folga_alvo_pct") < 0:
        raise DegenerateConfigurationError("folga_alvo_* no puede ser negativa")


def _validar_prazos(cfg: Configuration) -> None:
    if not cfg.prazos:
        raise DegenerateConfigurationError("La tabla de plazos está vacía")

    meses = [p.meses for p in cfg.prazos]
    if len(set(meses)) != len(meses):
        raise DegenerateConfigurationError(f"Plazos duplicados: {sorted(meses)}")

    for p in cfg.prazos:
        if p.meses <= 0:
            raise DegenerateConfigurationError(f"Plazo inválido: {p.meses} meses")
        if _cfg_num(p.taxa_mensal, f"taxa_mensal[{p.meses}]") < 0:
            raise DegenerateConfigurationError(f"Tasa negativa en plazo de {p.meses} meses")

    ref = cfg.prazo_referencia_meses
    if ref is not None and ref not in meses:
        raise DegenerateConfigurationError(f"prazo_referencia_meses={ref} no está entre los plazos ofrecidos")


def _validar_limites(cfg: Configuration) -> None:
    limites = {
        "limite_bom_reais": cfg.limite_bom_reais,
        "limite_bom_pct": cfg.limite_bom_pct,
        "limite_regular_reais": cfg.limite_regular_reais,
        "limite_regular_pct": cfg.limite_regular_pct,
    }
    for nombre, v in limites.items():
        if _cfg_num(v, nombre) < 0:
            raise DegenerateConfigurationError(f"{nombre} no puede ser negativo")

    # "bom" debe ser más estricto que "regular" en ambos componentes
    if cfg.limite_bom_reais > cfg.limite_regular_reais or cfg.limite_bom_pct > cfg.limite_regular_pct:
        raise DegenerateConfigurationError("Los límites de 'bom' no pueden superar los de 'regular'")


def _validar_faixas(cfg: Configuration) -> None:
    anterior = 0.0
    for i, f in enumerate(cfg.faixas_custo):
        if _cfg_num(f.custo_kwp, f"faixas_custo[{i}].custo_kwp") <= 0:
            raise DegenerateConfigurationError(f"faixas_custo[{i}].custo_kwp debe ser > 0")
        if f.ate_kwp is None:
            if i != len(cfg.faixas_custo) - 1:
                raise DegenerateConfigurationError("Solo la última faixa puede no tener límite")
            continue
        if _cfg_num(f.ate_kwp, f"faixas_custo[{i}].ate_kwp") <= anterior:
            raise DegenerateConfigurationError("faixas_custo debe estar en orden creciente de ate_kwp")
        anterior = float(f.ate_kwp)
