"""Product catalog persistence and domain-entity layer."""

__version__ = "0.1.0"
