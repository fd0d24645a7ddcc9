"""
Core utilities shared across the roster package.

This package hosts:
- configuration helpers (env vars, storage backend selection)
- the exception hierarchy raised by storage/repository layers
- logging setup and small helpers (ids, timestamps)

Storage clients never read the environment themselves; they receive the
values they need from Settings at construction time.
"""
