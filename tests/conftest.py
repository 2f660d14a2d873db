from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Callable

import httpx
import pytest

from adapters.api_client import InvalidationApiClient
from core.domain.models import LogEntry
from core.interfaces.ui import PanelPorts
from core.services.panel import ControlPanel
from core.services.presenter import OperationLog


class FakeField:
    def __init__(self, value: str = "") -> None:
        self.value = value
        self.set_calls: list[str] = []

    def get_value(self) -> str:
        return self.value

    def set_value(self, value: str) -> None:
        self.set_calls.append(value)
        self.value = value


class FakeSelect(FakeField):
    def __init__(self) -> None:
        super().__init__()
        self.options: list[tuple[str, str]] = []

    def add_option(self, value: str, label: str) -> None:
        self.options.append((value, label))


class FakeControl:
    def __init__(self) -> None:
        self.enabled = True
        self.calls: list[str] = []

    def enable(self) -> None:
        self.calls.append("enable")
        self.enabled = True

    def disable(self) -> None:
        self.calls.append("disable")
        self.enabled = False


class FakeIndicator:
    def __init__(self) -> None:
        self.visible = False
        self.calls: list[str] = []

    def show(self) -> None:
        self.calls.append("show")
        self.visible = True

    def hide(self) -> None:
        self.calls.append("hide")
        self.visible = False


class RecordingView:
    def __init__(self) -> None:
        self.nav: list[str] = []
        self.details: list[LogEntry] = []
        self.active: str | None = None
        self.demoted: list[str] = []
        self.refreshes = 0

    def show_entry(self, entry: LogEntry, *, newest_first: bool) -> None:
        if newest_first:
            self.nav.insert(0, entry.anchor)
        else:
            self.nav.append(entry.anchor)
        self.details.append(entry)

    def set_active(self, anchor: str, previous: str | None) -> None:
        if previous is not None:
            self.demoted.append(previous)
        self.active = anchor

    def refresh(self) -> None:
        self.refreshes += 1


FIXED_NOW = datetime(2024, 5, 17, 14, 3, 9)


def fixed_clock() -> datetime:
    return FIXED_NOW


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def ports() -> PanelPorts:
    return PanelPorts(
        create_distribution=FakeSelect(),
        create_paths=FakeField(),
        create_button=FakeControl(),
        get_distribution=FakeSelect(),
        get_invalidation_id=FakeField(),
        get_button=FakeControl(),
        loading=FakeIndicator(),
    )


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def log(view: RecordingView) -> OperationLog:
    return OperationLog(view, clock=fixed_clock)


@pytest.fixture
def make_api() -> Callable[..., InvalidationApiClient]:
    """Build an API client whose transport is the given request handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> InvalidationApiClient:
        client = httpx.AsyncClient(
            base_url="http://panel.test",
            transport=httpx.MockTransport(handler),
            headers={"Accept": "application/json"},
        )
        return InvalidationApiClient(client)

    return _make


@pytest.fixture
def make_panel(ports: PanelPorts, log: OperationLog, make_api) -> Callable[..., ControlPanel]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ControlPanel:
        return ControlPanel(api=make_api(handler), ports=ports, log=log)

    return _make
