"""Table formatting for security scan results."""

__version__ = "0.1.0"
