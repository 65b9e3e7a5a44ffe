"""User-account backend: registration, token login, password reset and admin directory."""
