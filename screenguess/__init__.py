"""Round fairness and integrity engine for the screenshot guessing game."""

__version__ = "0.1.0"
