"""Pontual - attendance, payroll and PIX payment backend."""

__version__ = "0.1.0"
