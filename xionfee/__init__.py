"""Minimum-fee rules, fee parameters, genesis tooling and chain helpers."""

__version__ = "0.1.0"