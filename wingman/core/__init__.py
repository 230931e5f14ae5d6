"""
Core utilities shared across the Wingman backend.

This package hosts configuration helpers (env vars, storage backend choice)
and logging setup. Repositories and services depend on these primitives
instead of reading os.environ directly.
"""

