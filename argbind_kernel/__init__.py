"""
argbind kernel -- domain types, schemas, exceptions and logging.

Binds ``key=value`` command-line tokens onto a declared result schema:
- Explicit field descriptors (no runtime annotation discovery in the core)
- Approximate key matching by edit distance
- Type-directed coercion of string values
"""

__version__ = "0.1.0"
