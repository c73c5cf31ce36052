from dataclasses import dataclass
from typing import Optional
import logging
import time

from swiftlink.core.exceptions import LinkCreationError, StorageFault, UniqueViolation
from swiftlink.db.repository import LinkStore
from swiftlink.utils.encoding import DEFAULT_CODE_SIZE, generate_code
from swiftlink.utils.validators import validate_url


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedLink:
    code: str
    url: str


@dataclass(frozen=True)
class LinkInfo:
    code: str
    url: str
    created_at: int


class LinkRegistry:
    """
    Create-or-return registration of short links.

    The registry keeps no state between calls. Concurrent ``create`` calls for
    the same URL are settled by the database: exactly one insert wins, the
    others hit a unique violation and re-read the winner's code.
    """

    def __init__(self, store: LinkStore, code_size: int = DEFAULT_CODE_SIZE, max_code_attempts: int = 5):
        self.store = store
        self.code_size = code_size
        self.max_code_attempts = max_code_attempts

    def create(self, url: str) -> CreatedLink:
        validate_url(url)

        try:
            existing = self.store.find_code_by_url(url)
        except StorageFault:
            raise LinkCreationError()
        if existing:
            logger.info(f"URL already exists: {existing} -> {url[:50]}")
            return CreatedLink(code=existing, url=url)

        for attempt in range(1, self.max_code_attempts + 1):
            code = generate_code(self.code_size)
            created_at = int(time.time())
            try:
                self.store.insert(code, url, created_at)
            except UniqueViolation as e:
                winner = self._recover_from_conflict(url)
                if winner:
                    logger.info(f"URL inserted concurrently: {winner} -> {url[:50]}")
                    return CreatedLink(code=winner, url=url)
                logger.warning(
                    f"Short code collision on {e.constraint or code} "
                    f"(attempt {attempt}/{self.max_code_attempts})"
                )
                continue
            except StorageFault:
                raise LinkCreationError()

            logger.info(f"Created link: {code} -> {url[:50]} at {created_at}")
            return CreatedLink(code=code, url=url)

        logger.error(f"Failed to generate unique short code after {self.max_code_attempts} attempts")
        raise LinkCreationError()

    def _recover_from_conflict(self, url: str) -> Optional[str]:
        try:
            return self.store.find_code_by_url(url)
        except StorageFault:
            logger.error(f"Error fetching existing URL after conflict: {url[:50]}")
            raise LinkCreationError()

    def lookup(self, code: str) -> Optional[LinkInfo]:
        row = self.store.find_url_by_code(code)
        if row is None:
            return None
        return LinkInfo(code=code, url=row.url, created_at=row.created_at)

    def delete(self, code: str) -> bool:
        """Delete the link for ``code``. Returns False when no such link exists."""
        deleted = self.store.delete_by_code(code)
        if deleted:
            logger.info(f"Deleted code: {code}")
        return deleted > 0
