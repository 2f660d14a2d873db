"""Shared loading indicator with reference counting.

Create, Get and the catalog loader may be in flight at the same time but there
is a single spinner. The indicator is shown when the first holder arrives and
hidden only when the last one leaves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from core.interfaces.ui import Indicator

logger = logging.getLogger(__name__)


class BusyIndicator:
    def __init__(self, indicator: Indicator) -> None:
        self._indicator = indicator
        self._holders = 0

    @property
    def holders(self) -> int:
        return self._holders

    @property
    def busy(self) -> bool:
        return self._holders > 0

    def acquire(self) -> None:
        self._holders += 1
        if self._holders == 1:
            self._indicator.show()

    def release(self) -> None:
        if self._holders == 0:
            logger.warning("BusyIndicator.release() without a matching acquire()")
            return
        self._holders -= 1
        if self._holders == 0:
            self._indicator.hide()

    @contextmanager
    def hold(self) -> Iterator[None]:
        self.acquire()
        try:
            yield
        finally:
            self.release()
