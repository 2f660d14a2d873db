import html
import json
import re

from adapters.json_exporter import export_log_json, log_to_json
from adapters.report_exporter import export_log_html, render_log_html


def _fill(log):
    log.append("Create", "<b>Distribution:</b> www<br /><b>Paths:</b> /a<br />", {"id": "I1", "status": "InProgress"})
    log.append("Get Error", "<b>Distribution:</b> www<br /><b>Invalidation ID:</b> I9<br />", "Resource not found: I9")


def test_html_has_navigation_linked_to_detail_anchors(log):
    _fill(log)

    page = render_log_html(log=log, base_url="http://cdn.internal")

    assert 'href="#item-0"' in page
    assert 'href="#item-1"' in page
    assert 'id="item-0"' in page
    assert 'id="item-1"' in page
    # Newest first, and the newest link is the active one.
    assert page.index('href="#item-1"') < page.index('href="#item-0"')
    assert re.search(r'<a href="#item-1" class="active error">', page)
    assert '<a href="#item-0" class="">' in page
    # The detail fragment is rendered as markup, not re-escaped.
    assert "<b>Distribution:</b> www<br />" in page
    assert "http://cdn.internal" in page


def test_html_payload_block_round_trips(log):
    payload = {"id": "I1", "paths": ["/a<b>", "/ü"], "note": 'say "hi" & bye'}
    log.append("Create", "", payload)

    page = render_log_html(log=log)

    block = re.search(r"<pre>(.*?)</pre>", page, re.DOTALL).group(1)
    assert json.loads(html.unescape(block)) == payload


def test_html_export_writes_file(log, tmp_path):
    _fill(log)
    out = export_log_html(log=log, output_path=tmp_path / "reports" / "ops.html")
    assert out.exists()
    assert "<!doctype html>" in out.read_text(encoding="utf-8")


def test_html_for_empty_log(log):
    assert "No operations recorded." in render_log_html(log=log)


def test_json_export_keeps_entries_in_insertion_order(log, tmp_path):
    _fill(log)

    out = export_log_json(log=log, output_path=tmp_path / "ops.json")
    data = json.loads(out.read_text(encoding="utf-8"))

    assert data["active"] == "item-1"
    assert [e["anchor"] for e in data["entries"]] == ["item-0", "item-1"]
    assert data["entries"][0]["payload"] == {"id": "I1", "status": "InProgress"}
    assert data["entries"][1]["payload"] == "Resource not found: I9"
    assert data["entries"][1]["header"] == "Get Error : 14:03:09"
    assert log_to_json(log) == out.read_text(encoding="utf-8")
