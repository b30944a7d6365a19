"""Domain layer — references, link kinds, and sync planning.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
