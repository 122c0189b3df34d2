"""Per-form extraction session: one cycle in flight, results dropped after teardown."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..common.errors import ExtractionInProgressError, SessionDisposedError
from ..common.providers.base import BaseProvider
from .contracts import ExtractionResult, FieldDescriptor, FieldSet, validate_field_set
from .service import extract_fields

logger = logging.getLogger(__name__)


class FormSession:
    """Owns the FieldSet of one form for the lifetime of that form."""

    def __init__(
        self,
        fields: Sequence[FieldDescriptor],
        *,
        context_hint: str | None = None,
        provider: BaseProvider | None = None,
    ) -> None:
        self._fields: FieldSet = validate_field_set(fields)
        self._context_hint = context_hint
        self._provider = provider
        self._in_flight = False
        self._disposed = False

    @property
    def fields(self) -> FieldSet:
        return self._fields

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def submit(self, utterance: str, hint: str | None = None) -> ExtractionResult:
        """Run one extraction cycle and adopt its FieldSet on success.

        A failed cycle leaves ``fields`` untouched and is not retried.
        """
        if self._disposed:
            raise SessionDisposedError("Form session has been closed")
        if self._in_flight:
            raise ExtractionInProgressError("An extraction is already running for this form")

        self._in_flight = True
        try:
            result = await extract_fields(
                utterance,
                self._fields,
                hint if hint is not None else self._context_hint,
                provider=self._provider,
            )
        finally:
            self._in_flight = False

        if self._disposed:
            logger.info("Form session closed during extraction - discarding %d change(s)", len(result.changed))
            raise SessionDisposedError("Form session was closed before the extraction finished")

        self._fields = result.fields
        return result

    def dispose(self) -> None:
        self._disposed = True
