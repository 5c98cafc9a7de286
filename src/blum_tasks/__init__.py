"""Automation client for the Blum earn-tasks catalog."""

__version__ = "0.1.0"
