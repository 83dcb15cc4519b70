"""Directory service wrapping the TrueConf users API."""

import logging
from dataclasses import dataclass

from trueconf_console.adapters.trueconf_client import DirectoryClient
from trueconf_console.domain.errors import DirectoryError, NotFoundError
from trueconf_console.domain.users import UserRecord

_logger = logging.getLogger(__name__)


@dataclass
class DirectoryService:
    """Caller-facing policies for directory lookups and account creation."""

    client: DirectoryClient

    async def fetch_by_id(self, user_id: str) -> list[dict[str, object]]:
        """Return the user with an exact id as a one-item list, or an empty list.

        A remote 404 is not an error. Any other failure raises DirectoryError.
        """
        if not user_id:
            return []
        try:
            user = await self.client.get_user(user_id)
        except NotFoundError:
            _logger.info("User %s not found", user_id)
            return []
        except DirectoryError as exc:
            _logger.error("Directory lookup failed for %s: %s", user_id, exc.message)
            raise
        return [user]

    async def search(self, term: str, limit: int = 10) -> list[dict[str, object]]:
        """Search users by partial match; failures degrade to an empty list."""
        if not term:
            return []
        try:
            users = await self.client.search_users(term, limit=limit)
        except DirectoryError as exc:
            _logger.error("Directory search failed for %r: %s", term, exc.message)
            return []
        return [user for user in users if isinstance(user, dict)]

    async def create_user(self, record: UserRecord) -> dict[str, object]:
        """Create one user, raising DirectoryError with the remote message."""
        payload = record.to_payload()
        _logger.info("Creating user %s", record.id)
        try:
            result = await self.client.create_user(payload)
        except DirectoryError as exc:
            _logger.error("Failed to create user %s: %s", record.id, exc.message)
            raise
        _logger.info("User %s created", record.id)
        return result

    async def create_users_bulk(self, records: list[UserRecord]) -> dict[str, object]:
        """Create several users in one remote call."""
        payloads = [record.to_payload() for record in records]
        try:
            result = await self.client.create_users(payloads)
        except DirectoryError as exc:
            _logger.error(
                "Bulk create of %s users failed: %s", len(records), exc.message
            )
            raise
        _logger.info("%s users processed in bulk", len(records))
        return result
