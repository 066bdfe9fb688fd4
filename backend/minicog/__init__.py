"""Voice-driven Mini-Cog word recall screening."""

__version__ = "0.1.0"
