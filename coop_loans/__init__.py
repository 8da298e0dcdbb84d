"""Lending rules for a village savings-and-loan cooperative."""

__version__ = "0.1.0"
