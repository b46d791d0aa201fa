"""todoboard: personal to-do list service (REST API + terminal client)."""

__version__ = "0.1.0"
