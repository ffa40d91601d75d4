# ui/state_helpers.py
from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping, MutableMapping


# Solo INPUTS. No metas resultados aquí.
_FINGERPRINT_KEYS = ("client_budget", "current_tariff", "current_bill", "estado", "cidade")

_FP_KEY = "result_inputs_fingerprint"


def _norm_value(x: Any) -> Any:
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        # 500 y 500.0 son la misma entrada
        return round(float(x), 6)
    if isinstance(x, (str, bool)) or x is None:
        return x
    return str(x)


def build_inputs_fingerprint(entradas: Mapping[str, Any]) -> str:
    payload = {k: _norm_value(entradas.get(k)) for k in _FINGERPRINT_KEYS}
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def save_result_fingerprint(state: MutableMapping[str, Any], entradas: Mapping[str, Any]) -> str:
    fp = build_inputs_fingerprint(entradas)
    state[_FP_KEY] = fp
    return fp


def is_result_stale(state: Mapping[str, Any], entradas: Mapping[str, Any]) -> bool:
    saved = state.get(_FP_KEY)
    if not saved:
        return False
    return str(saved) != build_inputs_fingerprint(entradas)
