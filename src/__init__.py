"""Service Config: environment-driven configuration for an HTTP service.

Loads log and server settings from environment variables into one immutable
snapshot, reporting every invalid variable at once, and runs a minimal
FastAPI shell with it.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
