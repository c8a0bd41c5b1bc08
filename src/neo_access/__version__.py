"""Version information for neo-access."""

__version__ = "0.3.0"
