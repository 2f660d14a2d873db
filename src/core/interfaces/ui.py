"""UI ports of the panel.

Why Protocol:
- The handlers only need a handful of capabilities from the screen: read a
  value, set a value, enable/disable a control, show/hide an indicator and
  render a log entry.
- The terminal adapter and the in-memory test doubles satisfy these
  structurally, so the core has no dependency on rich.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from core.domain.models import LogEntry


@runtime_checkable
class ValueField(Protocol):
    """A free-text input."""

    def get_value(self) -> str:
        ...

    def set_value(self, value: str) -> None:
        ...


@runtime_checkable
class SelectField(ValueField, Protocol):
    """A selection input whose options come from the catalog."""

    def add_option(self, value: str, label: str) -> None:
        ...


@runtime_checkable
class Control(Protocol):
    """A trigger (button) that can be disabled while its operation runs."""

    def enable(self) -> None:
        ...

    def disable(self) -> None:
        ...


@runtime_checkable
class Indicator(Protocol):
    """A loading indicator."""

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...


@runtime_checkable
class LogView(Protocol):
    """Both synchronized views of the operation log (navigation + detail)."""

    def show_entry(self, entry: LogEntry, *, newest_first: bool) -> None:
        """Insert the navigation link and the detail block for `entry`."""

        ...

    def set_active(self, anchor: str, previous: str | None) -> None:
        """Highlight `anchor` in the navigation list, demoting `previous`."""

        ...

    def refresh(self) -> None:
        """Re-sync scroll-position tracking after the views changed."""

        ...


@dataclass
class PanelPorts:
    """Every widget the loader and the handlers touch."""

    create_distribution: SelectField
    create_paths: ValueField
    create_button: Control
    get_distribution: SelectField
    get_invalidation_id: ValueField
    get_button: Control
    loading: Indicator
