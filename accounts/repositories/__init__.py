"""
Persistence adapters.

These modules encapsulate how users and revoked tokens are stored/retrieved.
Services depend on the repository methods rather than touching SQLAlchemy
sessions directly.
"""
