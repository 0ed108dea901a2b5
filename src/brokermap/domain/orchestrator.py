"""Save-then-check import workflow."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from brokermap.domain.entities import ImportCandidate, ImportMapping
from brokermap.domain.errors import ConflictError, ImportFailedError

logger = logging.getLogger(__name__)


class ImportState(str, Enum):
    """States of an import run."""

    IDLE = "idle"
    SAVING = "saving"
    CHECKING = "checking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Transition:
    """One recorded state change."""

    source: ImportState
    target: ImportState
    detail: str = ""


class MappingStore(Protocol):
    def save_mapping(self, mapping: ImportMapping) -> None: ...

    def invalidate(self, account_id: Optional[int]) -> None: ...


class ImportChecker(Protocol):
    def check_import(
        self, account_id: int, activities: Sequence[ImportCandidate]
    ) -> list[ImportCandidate]: ...

    def create_activities(self, activities: Sequence[ImportCandidate]) -> int: ...


class ImportOrchestrator:
    """Run the import workflow: save the mapping, then check the activities.

    The mapping stays saved when the check fails. A failed or finished run
    can be started again with :meth:`run`; a run that is still saving or
    checking cannot.
    """

    def __init__(
        self,
        mapping_store: MappingStore,
        checker: ImportChecker,
        on_success: Optional[Callable[[list[ImportCandidate]], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        """Initialize orchestrator.

        Args:
            mapping_store: Saves mappings and drops cached ones
            checker: Checks and creates activities
            on_success: Called with the checked activities after a successful run
            on_error: Called with a message after a failed run. Without it,
                failures raise ImportFailedError.
        """
        self.mapping_store = mapping_store
        self.checker = checker
        self.on_success = on_success
        self.on_error = on_error
        self.state = ImportState.IDLE
        self.history: list[Transition] = []
        self.activities: list[ImportCandidate] = []

    @property
    def is_pending(self) -> bool:
        return self.state in (ImportState.SAVING, ImportState.CHECKING)

    def _transition(self, target: ImportState, detail: str = "") -> None:
        self.history.append(Transition(self.state, target, detail))
        logger.debug("Import %s -> %s %s", self.state.value, target.value, detail)
        self.state = target

    def _fail(self, exc: Exception) -> None:
        message = f"Import failed: {exc}"
        self._transition(ImportState.FAILED, str(exc))
        logger.warning(message)
        if self.on_error is None:
            raise ImportFailedError(message) from exc
        self.on_error(message)

    def run(
        self, mapping: ImportMapping, candidates: Sequence[ImportCandidate]
    ) -> Optional[list[ImportCandidate]]:
        """Save ``mapping`` and check ``candidates`` for its account.

        Returns:
            Checked activities, or None if the run failed and an error
            callback handled it

        Raises:
            ConflictError: If a run is already in progress
            ImportFailedError: If the run failed and no error callback is set
        """
        if self.is_pending:
            raise ConflictError(f"Import already in progress ({self.state.value})")
        if self.state != ImportState.IDLE:
            self._transition(ImportState.IDLE, "restart")
        self.activities = []

        self._transition(ImportState.SAVING)
        try:
            self.mapping_store.save_mapping(mapping)
        except Exception as exc:
            self._fail(exc)
            return None

        self._transition(ImportState.CHECKING)
        try:
            checked = self.checker.check_import(mapping.account_id, candidates)
        except Exception as exc:
            self._fail(exc)
            return None

        self.mapping_store.invalidate(mapping.account_id)
        self.activities = list(checked)
        self._transition(ImportState.SUCCEEDED, f"{len(checked)} activities")
        if self.on_success is not None:
            self.on_success(self.activities)
        return self.activities

    def confirm(self, activities: Optional[Sequence[ImportCandidate]] = None) -> int:
        """Create the checked activities of the last successful run.

        Args:
            activities: Activities to create; defaults to the checked activities

        Returns:
            Number of activities created

        Raises:
            ConflictError: If the last run did not succeed
        """
        if self.state != ImportState.SUCCEEDED:
            raise ConflictError(f"Cannot confirm import in state {self.state.value}")
        return self.checker.create_activities(self.activities if activities is None else activities)
