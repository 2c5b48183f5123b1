"""Core infrastructure: errors and security."""
