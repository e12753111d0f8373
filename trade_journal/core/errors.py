"""Errors raised across the engine boundary."""


class InvalidInput(ValueError):
    """Caller handed the engine data it should have rejected (empty fills, zero main quantity, bad row)."""
