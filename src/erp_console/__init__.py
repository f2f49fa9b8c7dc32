"""Administration console for the academic enrollment backend."""

__version__ = "0.1.0"
