"""Thin git automation used by the ghost artifact store."""

__version__ = "0.1.0"
