"""Helpers shared by the management and web services."""
