"""Pull/push the fleet catalog against the remote document.

Failures never touch the in-memory fleet: they only flip ``status`` to
``SYNC_ERROR`` and keep the error for display.
"""

from __future__ import annotations

import logging

from berthwatch.models import SyncStatus
from berthwatch.storage.fleet import Fleet
from berthwatch.storage.github import CatalogUnavailableError, GitHubCatalogStore

logger = logging.getLogger(__name__)


class CatalogSync:
    """Tracks the remote version token and the outcome of the last exchange."""

    def __init__(self, store: GitHubCatalogStore):
        self.store = store
        self.sha: str | None = None
        self.status = SyncStatus.NEVER_SYNCED
        self.last_error: CatalogUnavailableError | None = None

    def pull(self, fleet: Fleet) -> SyncStatus:
        """Replace the fleet catalog with the remote document."""
        try:
            document = self.store.fetch()
        except CatalogUnavailableError as exc:
            return self._failed("pull", exc)

        fleet.load_records(document.records, merge=False)
        self.sha = document.sha
        return self._synced()

    def refresh_token(self) -> SyncStatus:
        """Fetch only the current remote sha, e.g. before pushing a locally edited catalog."""
        try:
            document = self.store.fetch()
        except CatalogUnavailableError as exc:
            return self._failed("refresh", exc)

        self.sha = document.sha
        return self._synced()

    def push(self, fleet: Fleet) -> SyncStatus:
        """Overwrite the remote document with the fleet catalog."""
        try:
            new_sha = self.store.save(fleet.records(), sha=self.sha)
        except CatalogUnavailableError as exc:
            return self._failed("push", exc)

        self.sha = new_sha
        return self._synced()

    def _synced(self) -> SyncStatus:
        self.status = SyncStatus.SYNCED
        self.last_error = None
        return self.status

    def _failed(self, action: str, exc: CatalogUnavailableError) -> SyncStatus:
        logger.warning("Catalog %s failed (status=%s): %s", action, exc.status, exc)
        self.status = SyncStatus.SYNC_ERROR
        self.last_error = exc
        return self.status
