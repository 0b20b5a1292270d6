"""CO₂ Storage Atlas geodata import pipeline."""

__version__ = "0.1.0"
