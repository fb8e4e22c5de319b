"""Case store contract.

The store is the only shared mutable resource. Updates are field-level merges:
an operation sends only the fields it recomputed, so a concurrent write to
unrelated fields of the same case is never lost. Backends serialize the
read-merge-write per case id.

A field that is sent is replaced whole. ``status`` and ``status_history`` are
computed by the caller from its own earlier read, so when two transitions race
on one case the last write wins for both, and the loser's history entry is
dropped.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from pydantic import ValidationError

from ayur_core_lib.exceptions import EngineError, InvalidInputError
from ayur_core_lib.models.case import Case, UserContext
from ayur_core_lib.models.common import utc_now

# Fields no update may touch
IMMUTABLE_FIELDS = frozenset({"case_id", "created_at", "user_context"})


def merge_case(existing: Case, fields: Dict[str, Any]) -> Case:
    """Merge a partial update into a case and stamp updated_at.

    Raises:
        InvalidInputError: unknown or immutable field names
        EngineError: the merged record fails validation
    """
    unknown = set(fields) - set(Case.model_fields)
    if unknown:
        raise InvalidInputError(f"Unknown case fields: {sorted(unknown)}")
    immutable = set(fields) & IMMUTABLE_FIELDS
    if immutable:
        raise InvalidInputError(f"Immutable case fields cannot be updated: {sorted(immutable)}")

    data = dict(existing)
    data.update(fields)
    data["updated_at"] = max(utc_now(), existing.updated_at)
    try:
        return Case.model_validate(data)
    except ValidationError as e:
        raise EngineError(f"Merged case {existing.case_id} failed validation: {e}") from e


class CaseStore(ABC):
    """Abstract create/read/update storage for cases keyed by case id."""

    @abstractmethod
    async def create(self, user_context: UserContext) -> Case:
        """Allocate a case id and persist a new case in CONTEXT_COLLECTED."""

    @abstractmethod
    async def get(self, case_id: str) -> Case:
        """Return the case.

        Raises:
            CaseNotFoundError: unknown case id
        """

    @abstractmethod
    async def update(self, case_id: str, fields: Dict[str, Any]) -> Case:
        """Merge fields into the stored case and return the result.

        Raises:
            CaseNotFoundError: unknown case id
        """

    @abstractmethod
    async def list_cases(self) -> List[Case]:
        """Return every stored case (used for admin statistics)."""

    async def close(self) -> None:
        """Release backend resources. Override when the store holds connections."""
        pass
