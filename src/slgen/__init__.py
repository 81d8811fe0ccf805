"""slgen: specification-to-Go postcondition generator."""

__version__ = "0.1.0"
