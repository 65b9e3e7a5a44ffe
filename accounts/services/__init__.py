"""
High-level use cases for the accounts backend.

Each service module orchestrates repositories/adapters to implement business
rules (register, log in, reset a password, edit a profile, revoke a token).

Routers (FastAPI endpoints) call these services instead of touching the
database or token machinery directly.
"""
