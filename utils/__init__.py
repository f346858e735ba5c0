"""Shared utilities: logging, errors, validation, geocoding."""
