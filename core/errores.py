# core/errores.py
from __future__ import annotations


class CalculoError(ValueError):
    """Base de errores del motor de cálculo."""


class InvalidInputError(CalculoError):
    """Presupuesto, tarifa o valores del sistema no positivos o no finitos."""


class DegenerateConfigurationError(CalculoError):
    """La configuración produce aritmética indefinida (sin plazos, generación cero, ...)."""
