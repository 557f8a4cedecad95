"""Server configuration and shared constants."""
