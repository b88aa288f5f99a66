"""PDF and JSON exports of a calculation."""

import json

from catalog import get_tool
from components.export import build_pdf, input_rows, result_json
from components.forms import default_values
from components.registry import get_entry, run


def test_pdf_report():
    entry = get_entry("mortgage")
    values = default_values(entry["fields"])
    result = run("mortgage", values)
    pdf = build_pdf(get_tool("mortgage"), entry["fields"], values, result, entry["metrics"])
    assert isinstance(pdf, bytes)
    assert pdf.startswith(b"%PDF")


def test_pdf_with_rows_inputs():
    entry = get_entry("debt-snowball")
    values = default_values(entry["fields"])
    result = run("debt-snowball", values)
    pdf = build_pdf(get_tool("debt-snowball"), entry["fields"], values, result, entry["metrics"])
    assert pdf.startswith(b"%PDF")


def test_input_rows_flatten_rows_fields():
    entry = get_entry("debt-avalanche")
    rows = input_rows(entry["fields"], default_values(entry["fields"]))
    labels = [r[0] for r in rows]
    assert "Debts 1.name" in labels
    assert ["Debts 1.name", "Credit card"] in rows


def test_input_rows_use_select_labels():
    entry = get_entry("compound-interest")
    rows = input_rows(entry["fields"], default_values(entry["fields"]))
    assert ["Compounding", "Monthly"] in rows


def test_result_json():
    tool = {"slug": "roi", "title": "ROI Calculator"}
    text = result_json(tool, {"gain": 10.0}, {"roi": float("nan"), "nested": [float("inf"), 1.5]})
    data = json.loads(text)
    assert data["tool"] == "roi"
    assert data["inputs"] == {"gain": 10.0}
    assert data["result"]["roi"] is None
    assert data["result"]["nested"] == [None, 1.5]
