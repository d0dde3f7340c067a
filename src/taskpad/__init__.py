"""taskpad: a small task-list API and console client."""

__version__ = "0.1.0"
