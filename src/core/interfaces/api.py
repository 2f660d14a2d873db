"""Contract of the invalidation API as seen by the core.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- Keeps the handlers independent from httpx: `adapters.api_client` implements
  it and tests can swap in anything with the same three coroutines.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class InvalidationApi(Protocol):
    """Minimal contract for the distributions API.

    Rules:
    - Every call is asynchronous because it performs HTTP I/O.
    - Failures are raised as `core.errors.PanelError` subclasses.
    """

    async def list_distributions(self) -> list[str]:
        """Identifiers of the distributions the caller may invalidate."""

        ...

    async def create_invalidation(self, distribution: str, paths: list[str]) -> Any:
        """Submit an invalidation and return the server's record."""

        ...

    async def get_invalidation(self, distribution: str, invalidation_id: str) -> Any:
        """Fetch the server's record for an existing invalidation."""

        ...
