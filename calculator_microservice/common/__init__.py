"""Shared models, validation, operations and logging."""
