"""Panel assembly.

Wires one API client, one set of UI ports and one operation log into the
catalog loader and the two command handlers, sharing a single busy indicator.
Entry points (interactive panel, one-shot commands, tests) all go through this.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.models import LogEntry
from core.interfaces.api import InvalidationApi
from core.interfaces.ui import LogView, PanelPorts
from core.services.busy import BusyIndicator
from core.services.catalog import CatalogLoader
from core.services.invalidations import CreateInvalidationHandler, GetInvalidationHandler
from core.services.presenter import OperationLog


@dataclass
class ControlPanel:
    api: InvalidationApi
    ports: PanelPorts
    log: OperationLog
    busy: BusyIndicator = field(init=False)
    catalog: CatalogLoader = field(init=False)
    create: CreateInvalidationHandler = field(init=False)
    get: GetInvalidationHandler = field(init=False)

    def __post_init__(self) -> None:
        self.busy = BusyIndicator(self.ports.loading)
        self.catalog = CatalogLoader(self.api, self.ports, self.log, self.busy)
        self.create = CreateInvalidationHandler(self.api, self.ports, self.log, self.busy)
        self.get = GetInvalidationHandler(self.api, self.ports, self.log, self.busy)

    @classmethod
    def build(
        cls,
        api: InvalidationApi,
        ports: PanelPorts,
        view: LogView,
        *,
        newest_first: bool = True,
    ) -> "ControlPanel":
        return cls(api=api, ports=ports, log=OperationLog(view, newest_first=newest_first))

    async def start(self) -> list[str]:
        """Startup sequence: fill the distribution selects."""

        return await self.catalog.load_distributions()

    async def submit_create(self, distribution: str, paths: str) -> LogEntry:
        self.ports.create_distribution.set_value(distribution)
        self.ports.create_paths.set_value(paths)
        return await self.create.run()

    async def submit_get(self, distribution: str, invalidation_id: str) -> LogEntry:
        self.ports.get_distribution.set_value(distribution)
        self.ports.get_invalidation_id.set_value(invalidation_id)
        return await self.get.run()
