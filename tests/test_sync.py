"""Tests for catalog pull/push and the sync error status."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import responses

from berthwatch.models import CatalogDocument, SyncStatus
from berthwatch.storage.fleet import Fleet
from berthwatch.storage.github import CatalogUnavailableError, GitHubCatalogStore, GitHubConfig
from berthwatch.storage.sync import CatalogSync


@pytest.fixture
def store():
    return MagicMock(spec=GitHubCatalogStore)


def test_initial_status(store):
    assert CatalogSync(store).status is SyncStatus.NEVER_SYNCED


def test_pull_replaces_catalog(store, fleet: Fleet):
    store.fetch.return_value = CatalogDocument(
        records=[{"name": "Charlie", "category": "C", "loa": 60, "beam": 12, "draft": 4}], sha="s1",
    )
    sync = CatalogSync(store)

    assert sync.pull(fleet) is SyncStatus.SYNCED
    assert [v.name for v in fleet.vessels()] == ["Charlie"]
    assert sync.sha == "s1"


def test_pull_failure_keeps_state(store, fleet: Fleet):
    fleet.assign("P1-praia", "Alfa Star")
    store.fetch.side_effect = CatalogUnavailableError("HTTP 503", status=503)
    sync = CatalogSync(store)
    sync.sha = "previous"

    assert sync.pull(fleet) is SyncStatus.SYNC_ERROR
    assert sync.status is SyncStatus.SYNC_ERROR
    assert sync.last_error.status == 503
    assert [v.name for v in fleet.vessels()] == ["Alfa Star", "Bravo Tide"]
    assert fleet.berths == {"P1-praia": "alfa star"}
    assert sync.sha == "previous"


def test_push_sends_token_and_updates_it(store, fleet: Fleet):
    store.save.return_value = "s2"
    sync = CatalogSync(store)
    sync.sha = "s1"

    assert sync.push(fleet) is SyncStatus.SYNCED
    store.save.assert_called_once_with(fleet.records(), sha="s1")
    assert sync.sha == "s2"


def test_push_failure_keeps_token(store, fleet: Fleet):
    store.save.side_effect = CatalogUnavailableError("HTTP 409", status=409)
    sync = CatalogSync(store)
    sync.sha = "s1"

    assert sync.push(fleet) is SyncStatus.SYNC_ERROR
    assert sync.sha == "s1"
    assert len(fleet) == 2


def test_recovers_after_error(store, fleet: Fleet):
    store.fetch.side_effect = [CatalogUnavailableError("down"), CatalogDocument(records=[], sha=None)]
    sync = CatalogSync(store)

    assert sync.pull(fleet) is SyncStatus.SYNC_ERROR
    assert sync.pull(fleet) is SyncStatus.SYNCED
    assert sync.last_error is None
    assert len(fleet) == 0


def test_refresh_token_leaves_fleet(store, fleet: Fleet):
    store.fetch.return_value = CatalogDocument(records=[], sha="remote")
    sync = CatalogSync(store)

    assert sync.refresh_token() is SyncStatus.SYNCED
    assert sync.sha == "remote"
    assert len(fleet) == 2


@responses.activate
def test_push_with_malformed_reply_is_sync_error(fleet: Fleet):
    config = GitHubConfig(token="tok", owner="acme", repo="harbor")
    responses.add(responses.PUT, config.contents_url, body="not json", status=200)
    sync = CatalogSync(GitHubCatalogStore(config))
    sync.sha = "s1"

    assert sync.push(fleet) is SyncStatus.SYNC_ERROR
    assert sync.sha == "s1"
