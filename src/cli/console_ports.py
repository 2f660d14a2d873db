"""Terminal implementation of the panel UI ports.

The widgets are plain state holders; the terminal only shows the spinner and
the operation log. Commands typed in the interactive panel write into the
fields and fire the handlers, the same way the form controls would.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.status import Status
from rich.table import Table

from cli.ui_components import build_entry_panel, build_history_table
from core.domain.models import LogEntry
from core.interfaces.ui import PanelPorts


class ConsoleField:
    def __init__(self, name: str, value: str = "") -> None:
        self.name = name
        self._value = value

    def get_value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value


class ConsoleSelect(ConsoleField):
    """Select input: with nothing chosen, the first option is the value."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.options: list[tuple[str, str]] = []

    def add_option(self, value: str, label: str) -> None:
        self.options.append((value, label))

    def has_option(self, value: str) -> bool:
        return any(v == value for v, _ in self.options)

    def get_value(self) -> str:
        if not self._value and self.options:
            return self.options[0][0]
        return self._value


class ConsoleButton:
    def __init__(self, name: str) -> None:
        self.name = name
        self.enabled = True

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False


class ConsoleSpinner:
    def __init__(self, console: Console, message: str = "Waiting for the API...") -> None:
        self._status = Status(message, console=console, spinner="dots")
        self.visible = False

    def show(self) -> None:
        if not self.visible:
            self._status.start()
            self.visible = True

    def hide(self) -> None:
        if self.visible:
            self._status.stop()
            self.visible = False


class RichLogView:
    """Navigation list + detail blocks on a Rich console.

    Detail blocks are printed as they arrive (when `echo` is on); the navigation
    list is kept in display order and rebuilt on `refresh()`.
    """

    def __init__(self, console: Console, *, echo: bool = True) -> None:
        self._console = console
        self._echo = echo
        self._nav: list[LogEntry] = []
        self._active: str | None = None
        self._nav_table: Table = build_history_table([], None)

    @property
    def nav(self) -> list[LogEntry]:
        return list(self._nav)

    @property
    def active(self) -> str | None:
        return self._active

    def show_entry(self, entry: LogEntry, *, newest_first: bool) -> None:
        if newest_first:
            self._nav.insert(0, entry)
        else:
            self._nav.append(entry)
        if self._echo:
            self._console.print(build_entry_panel(entry, active=True))

    def set_active(self, anchor: str, previous: str | None) -> None:
        self._active = anchor

    def refresh(self) -> None:
        self._nav_table = build_history_table(self._nav, self._active)

    def print_history(self) -> None:
        self._console.print(self._nav_table)

    def print_entry(self, entry: LogEntry) -> None:
        self._console.print(build_entry_panel(entry, active=entry.anchor == self._active))


@dataclass
class ConsolePorts(PanelPorts):
    create_distribution: ConsoleSelect
    create_paths: ConsoleField
    create_button: ConsoleButton
    get_distribution: ConsoleSelect
    get_invalidation_id: ConsoleField
    get_button: ConsoleButton
    loading: ConsoleSpinner


def build_console_ports(console: Console) -> ConsolePorts:
    return ConsolePorts(
        create_distribution=ConsoleSelect("create-invalidation-distribution"),
        create_paths=ConsoleField("create-invalidation-paths"),
        create_button=ConsoleButton("create-invalidation-button"),
        get_distribution=ConsoleSelect("get-invalidation-distribution"),
        get_invalidation_id=ConsoleField("get-invalidation-id"),
        get_button=ConsoleButton("get-invalidation-button"),
        loading=ConsoleSpinner(console),
    )
