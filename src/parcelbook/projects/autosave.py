"""Debounced auto-save of edited projects.

Edits accumulate in local state; the latest state is committed once no
further edit has arrived for ``delay_ms``. Intermediate states are
coalesced and never written.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from parcelbook.ledger.catalog import CategoryCatalog
from parcelbook.ledger.linkage import resolve_linked_label
from parcelbook.ledger.models import LedgerStats, Project, Transaction
from parcelbook.ledger.stats import compute_ledger_stats
from parcelbook.projects import editor
from parcelbook.repositories import resolve
from parcelbook.repositories.protocols import ProjectRepository

logger = logging.getLogger(__name__)


class AutosaveScheduler:
    """Commits the most recently scheduled project after a quiet period.

    ``commit`` may be sync or async. Must be used from a running event loop.
    """

    def __init__(self, commit: Callable[[Project], Any], delay_ms: int = 1500) -> None:
        self._commit = commit
        self.delay_ms = delay_ms
        self._delay = delay_ms / 1000.0
        self._pending: Project | None = None
        self._timer: asyncio.Task[None] | None = None
        self.commit_count = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, project: Project) -> None:
        """Record ``project`` as the latest state and restart the quiet period."""
        self._pending = project.model_copy(deep=True)
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_and_commit())

    async def flush(self) -> None:
        """Commit any pending state now."""
        self._cancel_timer()
        await self._commit_pending()

    def cancel(self) -> None:
        """Drop pending state without committing (component teardown)."""
        self._cancel_timer()
        self._pending = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _wait_and_commit(self) -> None:
        await asyncio.sleep(self._delay)
        # Past the quiet period: a new edit now starts a fresh timer
        # instead of cancelling this commit.
        self._timer = None
        await self._commit_pending()

    async def _commit_pending(self) -> None:
        project, self._pending = self._pending, None
        if project is None:
            return
        try:
            await resolve(self._commit(project))
        except Exception:
            logger.exception("Auto-save of project %s failed", project.id)
            return
        self.commit_count += 1
        logger.debug("Auto-saved project %s", project.id)


class EditingSession:
    """Local editing state of one project with debounced persistence.

    Derived figures are recomputed from the local state on every read, so
    they are consistent after each edit even before anything is saved.
    """

    def __init__(
        self,
        project: Project,
        repository: ProjectRepository,
        catalog: CategoryCatalog | None = None,
        delay_ms: int = 1500,
    ) -> None:
        self._project = project.model_copy(deep=True)
        self._catalog = catalog or CategoryCatalog()
        self._autosave = AutosaveScheduler(repository.save_project, delay_ms)

    @property
    def project(self) -> Project:
        return self._project.model_copy(deep=True)

    @property
    def stats(self) -> LedgerStats:
        return compute_ledger_stats(self._project.transactions)

    @property
    def autosave(self) -> AutosaveScheduler:
        return self._autosave

    def apply(self, operation: Callable[..., Project], *args: Any, **kwargs: Any) -> Project:
        """Run an editor operation on the local state and schedule a save.

        A rejected operation leaves the local state untouched.
        """
        self._project = operation(self._project, *args, **kwargs)
        self._autosave.schedule(self._project)
        return self.project

    def save_transaction(self, tx: Transaction) -> Project:
        return self.apply(editor.save_transaction, tx, self._catalog)

    def linked_label(self, tx: Transaction) -> str:
        return resolve_linked_label(tx, self._project.lands, self._project.buildings)

    async def flush(self) -> None:
        await self._autosave.flush()

    def close(self) -> None:
        self._autosave.cancel()
