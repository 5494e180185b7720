"""Core infrastructure: errors, paths, theme and settings."""
