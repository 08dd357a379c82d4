"""Core helpers shared across kubev-installer (logging, errors)."""
