"""Startup seeding of demo accounts."""

from __future__ import annotations

import logging

from accounts.core.errors import AccountError
from accounts.repositories.sql_repository import SQLRepository
from accounts.services.auth_service import AuthService

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    ("admin@todolist.com", "admin123", "Admin", "User"),
    ("john.doe@todolist.com", "password123", "John", "Doe"),
    ("test@todolist.com", "test123", "Test", "User"),
    ("demo@todolist.com", "demo123", "Demo", "Account"),
    ("developer@todolist.com", "dev123", "Developer", "Account"),
)


def load_sample_users(auth_service: AuthService, repository: SQLRepository) -> tuple[int, int]:
    """Register the demo users that are missing. Returns (created, skipped)."""
    logger.info("Starting to load sample users...")
    try:
        logger.info("Current user count in database: %d", repository.count_users())
    except AccountError:
        logger.error("Failed to access database. Sample data loading aborted.")
        return 0, 0

    created = 0
    skipped = 0
    for email, password, first_name, last_name in SAMPLE_USERS:
        try:
            if repository.email_exists(email):
                logger.info("Sample user %s already exists, skipping", email)
                skipped += 1
                continue
            auth_service.signup(email, password, first_name, last_name)
        except AccountError as exc:
            logger.error("Failed to create sample user %s: %s", email, exc.message)
            continue
        logger.info("Sample user created: %s", email)
        created += 1

    logger.info(
        "Sample data loading completed. Created: %d, Skipped: %d, Total users: %d",
        created,
        skipped,
        repository.count_users(),
    )
    return created, skipped
