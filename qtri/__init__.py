"""Graphical front-end to the Ruby ``ri``/``qri`` documentation browsers."""

__version__ = "0.1.0"
