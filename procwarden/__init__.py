"""Start and supervise processes listed in a configuration file."""

__version__ = "0.1.0"
__all__ = ["__version__"]