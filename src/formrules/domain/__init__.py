"""Domain layer — rules, registry, results, and form sessions.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
