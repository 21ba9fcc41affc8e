"""FitBot — AI fitness coach: streaming chat, plan generator, workout tracking."""

__version__ = "0.1.0"
