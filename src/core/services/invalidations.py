"""Invalidation command handlers.

Each handler drives one user-triggered operation end-to-end:

    IDLE -> VALIDATING -> SUBMITTING -> (SUCCEEDED | FAILED) -> IDLE

Input is validated before any network call. Once submitting, the trigger
control is disabled and the shared busy indicator held; both are restored
unconditionally on the way out, whatever the outcome. Every error is turned
into a log entry here and never propagates further.
"""

from __future__ import annotations

import logging
from typing import Any

from markupsafe import Markup

from core.domain.models import LogEntry, OperationState
from core.errors import PanelError, ValidationError
from core.interfaces.api import InvalidationApi
from core.interfaces.ui import Control, PanelPorts, SelectField, ValueField
from core.paths import parse_invalidation_id, parse_paths, validate_paths
from core.services.busy import BusyIndicator
from core.services.presenter import OperationLog

logger = logging.getLogger(__name__)


class _InvalidationHandler:
    label = ""

    def __init__(
        self,
        api: InvalidationApi,
        log: OperationLog,
        busy: BusyIndicator,
        *,
        distribution_field: SelectField,
        input_field: ValueField,
        control: Control,
    ) -> None:
        self._api = api
        self._log = log
        self._busy = busy
        self._distribution_field = distribution_field
        self._input_field = input_field
        self._control = control
        self.state = OperationState.IDLE
        self.outcome: OperationState | None = None

    @property
    def error_label(self) -> str:
        return f"{self.label} Error"

    @property
    def running(self) -> bool:
        return self.state is not OperationState.IDLE

    def _parse(self, raw: str) -> Any:
        raise NotImplementedError

    def _details(self, distribution: str, parsed: Any) -> str:
        raise NotImplementedError

    async def _submit(self, distribution: str, parsed: Any) -> Any:
        raise NotImplementedError

    def _transition(self, state: OperationState) -> None:
        logger.debug("%s: %s -> %s", self.label, self.state.value, state.value)
        self.state = state

    def _finish(self, outcome: OperationState) -> None:
        self._transition(outcome)
        self.outcome = outcome
        self._transition(OperationState.IDLE)

    async def run(self) -> LogEntry:
        """Run the operation once and return the log entry it produced."""

        self._transition(OperationState.VALIDATING)
        distribution = self._distribution_field.get_value()
        try:
            parsed = self._parse(self._input_field.get_value())
        except ValidationError as exc:
            entry = self._log.append(self.error_label, exc.message)
            self._finish(OperationState.FAILED)
            return entry

        self._transition(OperationState.SUBMITTING)
        self._control.disable()
        self._busy.acquire()
        try:
            details = self._details(distribution, parsed)
            try:
                data = await self._submit(distribution, parsed)
            except PanelError as exc:
                entry = self._log.append(self.error_label, details, exc.message)
                self._finish(OperationState.FAILED)
                return entry
            except Exception as exc:
                logger.exception("%s failed unexpectedly", self.label)
                entry = self._log.append(self.error_label, details, str(exc))
                self._finish(OperationState.FAILED)
                return entry

            entry = self._log.append(self.label, details, data)
            self._finish(OperationState.SUCCEEDED)
            return entry
        finally:
            self._input_field.set_value("")
            self._control.enable()
            self._busy.release()


class CreateInvalidationHandler(_InvalidationHandler):
    """Submit an invalidation for the comma-separated paths."""

    label = "Create"

    def __init__(
        self,
        api: InvalidationApi,
        ports: PanelPorts,
        log: OperationLog,
        busy: BusyIndicator,
    ) -> None:
        super().__init__(
            api,
            log,
            busy,
            distribution_field=ports.create_distribution,
            input_field=ports.create_paths,
            control=ports.create_button,
        )

    def _parse(self, raw: str) -> list[str]:
        return validate_paths(parse_paths(raw))

    def _details(self, distribution: str, parsed: list[str]) -> str:
        return str(
            Markup("<b>Distribution:</b> {}<br /><b>Paths:</b> {}<br />").format(
                distribution, ",".join(parsed)
            )
        )

    async def _submit(self, distribution: str, parsed: list[str]) -> Any:
        return await self._api.create_invalidation(distribution, parsed)


class GetInvalidationHandler(_InvalidationHandler):
    """Fetch the status of an invalidation by ID."""

    label = "Get"

    def __init__(
        self,
        api: InvalidationApi,
        ports: PanelPorts,
        log: OperationLog,
        busy: BusyIndicator,
    ) -> None:
        super().__init__(
            api,
            log,
            busy,
            distribution_field=ports.get_distribution,
            input_field=ports.get_invalidation_id,
            control=ports.get_button,
        )

    def _parse(self, raw: str) -> str:
        return parse_invalidation_id(raw)

    def _details(self, distribution: str, parsed: str) -> str:
        return str(
            Markup("<b>Distribution:</b> {}<br /><b>Invalidation ID:</b> {}<br />").format(
                distribution, parsed
            )
        )

    async def _submit(self, distribution: str, parsed: str) -> Any:
        return await self._api.get_invalidation(distribution, parsed)
