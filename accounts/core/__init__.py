"""
Core utilities shared across the accounts backend.

This package hosts:
- configuration helpers (env vars, token lifetime, storage URL)
- cross-cutting pieces such as logging setup, password hashing and the
  error taxonomy every service raises.

Services and routers should depend on these primitives instead of reading
os.environ or importing hashing libraries directly.
"""
