"""Web routes and dependencies."""
