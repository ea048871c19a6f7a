"""Domain layer: value types, reference grammar, and errors.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
