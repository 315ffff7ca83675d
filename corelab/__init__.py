"""Redcode instructions, battle scoring, an echo server and flood client, and integer utilities."""

__version__ = "0.1.0"