"""Vessel catalog document stored in a GitHub repository (contents API).

The document is a JSON list of vessel records. Reads return the records
together with the blob sha, which must be sent back on the next write so
GitHub can reject a stale overwrite.
"""

from __future__ import annotations

import base64
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

import requests
from pydantic import BaseModel

from berthwatch.models import CatalogDocument

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

_TIMEOUT_SECONDS = 15


class CatalogUnavailableError(Exception):
    """The remote catalog could not be read or written."""

    def __init__(self, message: str, status: int | None = None, details: str = ""):
        super().__init__(message)
        self.status = status
        self.details = details


class GitHubConfig(BaseModel):
    """GitHub document settings loaded from environment variables."""

    token: str
    owner: str
    repo: str
    path: str = "data/vessels.json"
    branch: str = "main"

    @classmethod
    def from_env(cls) -> GitHubConfig:
        """Load from environment variables. Raises ValueError if not configured."""
        token = os.environ.get("BERTHWATCH_GITHUB_TOKEN", "")
        owner = os.environ.get("BERTHWATCH_GITHUB_OWNER", "")
        repo = os.environ.get("BERTHWATCH_GITHUB_REPO", "")
        if not (token and owner and repo):
            raise ValueError(
                "GitHub catalog not configured. Set BERTHWATCH_GITHUB_TOKEN, "
                "BERTHWATCH_GITHUB_OWNER and BERTHWATCH_GITHUB_REPO."
            )
        return cls(
            token=token,
            owner=owner,
            repo=repo,
            path=os.environ.get("BERTHWATCH_GITHUB_PATH", "data/vessels.json"),
            branch=os.environ.get("BERTHWATCH_GITHUB_BRANCH", "main"),
        )

    @property
    def contents_url(self) -> str:
        return f"{GITHUB_API_URL}/repos/{self.owner}/{self.repo}/contents/{self.path}"


class GitHubCatalogStore:
    """Read/write the catalog document through the GitHub contents API."""

    def __init__(self, config: GitHubConfig, timeout: int = _TIMEOUT_SECONDS):
        self.config = config
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.token}",
            "Accept": "application/vnd.github+json",
        })

    def fetch(self) -> CatalogDocument:
        """Read the catalog. A missing document is an empty catalog with no sha."""
        url = self.config.contents_url
        logger.info("Fetching catalog %s/%s:%s", self.config.owner, self.config.repo, self.config.path)
        try:
            resp = self.session.get(url, params={"ref": self.config.branch}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog fetch failed: {exc}") from exc

        if resp.status_code == 404:
            logger.info("Catalog document does not exist yet")
            return CatalogDocument(records=[], sha=None)
        if not resp.ok:
            raise CatalogUnavailableError(
                f"Catalog fetch failed with HTTP {resp.status_code}",
                status=resp.status_code,
                details=resp.text,
            )

        try:
            payload = resp.json()
            content = base64.b64decode(payload["content"]).decode("utf-8")
            data = json.loads(content)
        except (KeyError, ValueError) as exc:
            raise CatalogUnavailableError(f"Catalog document is not valid JSON: {exc}") from exc

        return CatalogDocument(records=_records_from(data), sha=payload.get("sha"))

    def save(self, records: list[dict[str, Any]], sha: str | None = None) -> str:
        """Replace the catalog document. Returns the new sha.

        ``sha`` may only be omitted when the document does not exist yet.
        """
        content = json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
        body: dict[str, Any] = {
            "message": f"Update vessel catalog ({datetime.now(timezone.utc).isoformat(timespec='seconds')})",
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.config.branch,
        }
        if sha:
            body["sha"] = sha

        logger.info("Saving %d vessels to catalog document", len(records))
        try:
            resp = self.session.put(self.config.contents_url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog save failed: {exc}") from exc

        if not resp.ok:
            raise CatalogUnavailableError(
                f"Catalog save failed with HTTP {resp.status_code}",
                status=resp.status_code,
                details=resp.text,
            )

        try:
            return resp.json()["content"]["sha"]
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogUnavailableError(
                f"Catalog save reply has no content sha: {exc}",
                status=resp.status_code,
                details=resp.text,
            ) from exc


def _records_from(data: Any) -> list[dict[str, Any]]:
    """Accept a bare list or the older ``{"vessels": [...]}`` wrapper."""
    if isinstance(data, dict):
        data = data.get("vessels", [])
    if not isinstance(data, list):
        raise CatalogUnavailableError("Catalog document must be a list of vessel records")
    return [r for r in data if isinstance(r, dict)]
