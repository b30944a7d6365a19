"""Infrastructure layer — library store, link state, and plan execution.

All symlink reads and writes live here.
It must never import from services, commands, or output.
"""
