import io

from rich.console import Console

from cli.console_ports import ConsoleButton, ConsoleSelect, ConsoleSpinner, RichLogView, build_console_ports
from cli.ui_components import html_fragment_to_text
from conftest import fixed_clock
from core.interfaces.ui import Control, Indicator, LogView, PanelPorts, SelectField, ValueField
from core.services.presenter import OperationLog


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=100, force_terminal=False), buffer


def test_console_ports_satisfy_the_protocols():
    console, _ = _console()
    ports = build_console_ports(console)

    assert isinstance(ports.create_distribution, SelectField)
    assert isinstance(ports.create_paths, ValueField)
    assert isinstance(ports.create_button, Control)
    assert isinstance(ports.loading, Indicator)
    assert isinstance(RichLogView(console), LogView)


def test_console_ports_expose_concrete_widgets():
    console, _ = _console()
    ports = build_console_ports(console)

    assert isinstance(ports, PanelPorts)
    assert isinstance(ports.create_distribution, ConsoleSelect)
    assert isinstance(ports.get_distribution, ConsoleSelect)
    assert isinstance(ports.create_button, ConsoleButton)
    assert isinstance(ports.get_button, ConsoleButton)
    assert isinstance(ports.loading, ConsoleSpinner)


def test_select_defaults_to_first_option():
    select = ConsoleSelect("create-invalidation-distribution")
    assert select.get_value() == ""

    select.add_option("docs", "docs")
    select.add_option("www", "www")
    assert select.get_value() == "docs"
    assert select.has_option("www")

    select.set_value("www")
    assert select.get_value() == "www"


def test_spinner_show_hide_is_idempotent():
    console, _ = _console()
    spinner = build_console_ports(console).loading

    spinner.show()
    spinner.show()
    assert spinner.visible
    spinner.hide()
    spinner.hide()
    assert not spinner.visible


def test_log_view_echoes_entries_and_tracks_navigation():
    console, buffer = _console()
    view = RichLogView(console)
    log = OperationLog(view, clock=fixed_clock)

    log.append("Create", "<b>Distribution:</b> www<br /><b>Paths:</b> /a<br />", {"id": "I1"})
    log.append("Get Error", "Invalidation ID is empty")

    output = buffer.getvalue()
    assert "Create : 14:03:09" in output
    assert "Distribution: www" in output
    assert '"id": "I1"' in output
    assert "Invalidation ID is empty" in output
    assert [e.anchor for e in view.nav] == ["item-1", "item-0"]
    assert view.active == "item-1"

    view.print_history()
    assert "item-0" in buffer.getvalue()


def test_html_fragment_to_text():
    text = html_fragment_to_text("<b>Distribution:</b> www<br /><b>Invalidation ID:</b> I1<br />")
    assert text.plain == "Distribution: www\nInvalidation ID: I1"
    assert html_fragment_to_text("").plain == ""
