"""Reading core services."""
