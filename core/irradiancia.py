# core/irradiancia.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
HSP_PADRAO = 4.8


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


@lru_cache(maxsize=1)
def cargar_hsp(path: str = "hsp_estados.yaml") -> Dict[str, Dict[str, Any]]:
    doc = _read_yaml(DATA_DIR / path)
    estados = (doc.get("estados") or {}) if isinstance(doc, dict) else {}
    for uf, e in estados.items():
        if "hsp" not in e:
            raise ValueError(f"Falta 'hsp' en estados.{uf}")
    return estados


def hsp_por_estado(uf: str) -> float:
    e = cargar_hsp().get(str(uf or "").strip().upper())
    return float(e["hsp"]) if e else HSP_PADRAO


def hsp_por_cidade(nome: str) -> float:
    """Búsqueda parcial, sin distinguir mayúsculas."""
    buscado = str(nome or "").strip().lower()
    if not buscado:
        return HSP_PADRAO

    for e in cargar_hsp().values():
        for cidade, hsp in (e.get("cidades") or {}).items():
            c = cidade.lower()
            if buscado in c or c in buscado:
                return float(hsp)
    return HSP_PADRAO


def listar_estados() -> List[Dict[str, Any]]:
    return [
        {"codigo": uf, "nome": e.get("nome", uf), "hsp": float(e["hsp"])}
        for uf, e in cargar_hsp().items()
    ]


def listar_cidades() -> List[Dict[str, Any]]:
    out = [
        {"cidade": cidade, "estado": uf, "hsp": float(hsp)}
        for uf, e in cargar_hsp().items()
        for cidade, hsp in (e.get("cidades") or {}).items()
    ]
    return sorted(out, key=lambda c: c["cidade"])
