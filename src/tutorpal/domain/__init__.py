"""Domain layer — records, value types, range rules, and errors.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
