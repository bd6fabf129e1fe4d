"""
DDL migrations for the SQLite key-value store.

These create and evolve the store's own tables. Data migrations
between application versions live in ``fedimigrate.migrations``.
"""

__all__ = []
