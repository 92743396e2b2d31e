"""Commute weather recommendations: clothing and rain gear for two daily commutes."""

__version__ = "0.1.0"
