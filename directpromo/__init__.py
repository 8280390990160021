"""DirectPromo quote-request backend."""

__version__ = "0.1.0"
