"""instr — keep per-project instruction symlinks in sync with a central library."""

__version__ = "0.3.0"
