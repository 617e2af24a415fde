"""Render Code::Stats language experience as an ASCII bar chart inside a README."""

__version__ = "1.0.0"
