"""Calculator backend: projection engine, calculator compositions and HTTP API."""

__version__ = "0.1.0"
