"""Distribution catalog loader.

Runs once at startup: fills both distribution selects from the catalog
endpoint, or logs why it could not.
"""

from __future__ import annotations

import logging

from core.errors import PanelError
from core.interfaces.api import InvalidationApi
from core.interfaces.ui import PanelPorts
from core.services.busy import BusyIndicator
from core.services.presenter import OperationLog

logger = logging.getLogger(__name__)

CATALOG_ERROR_HEADER = "Error Populating Distributions"


class CatalogLoader:
    def __init__(
        self,
        api: InvalidationApi,
        ports: PanelPorts,
        log: OperationLog,
        busy: BusyIndicator,
    ) -> None:
        self._api = api
        self._ports = ports
        self._log = log
        self._busy = busy

    async def load_distributions(self) -> list[str]:
        """Populate the selects; returns the identifiers added (empty on failure)."""

        with self._busy.hold():
            try:
                distributions = await self._api.list_distributions()
            except PanelError as exc:
                self._log.append(CATALOG_ERROR_HEADER, "", exc.message)
                return []
            except Exception as exc:
                logger.exception("unexpected error loading the distribution catalog")
                self._log.append(CATALOG_ERROR_HEADER, "", str(exc))
                return []

            for distribution in distributions:
                self._ports.create_distribution.add_option(distribution, distribution)
                self._ports.get_distribution.add_option(distribution, distribution)
            logger.info("loaded %d distributions", len(distributions))
            return distributions
