"""Core infrastructure: paths, settings, logging and sweep history."""
