"""Wagerline: event settlement and change notification core for a wagering platform."""

__version__ = "0.1.0"
__author__ = "Wagerline Team"

__all__ = ["__version__", "__author__"]
