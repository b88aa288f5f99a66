# components/export.py
"""PDF and JSON exports of a single calculation."""

import io
import json
import math
from datetime import date
from typing import Dict, List, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .formatting import fmt

DISCLAIMER = (
    "Estimates for educational purposes only. Results depend on the inputs you "
    "enter and simplified assumptions; they are not financial, tax or legal advice."
)

TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E6ECE9")),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ]
)


def _flatten(prefix: str, obj, rows: List[List[str]]):
    if isinstance(obj, dict):
        for k, v in obj.items():
            _flatten(f"{prefix}{k}.", v, rows)
    elif isinstance(obj, list):
        for i, v in enumerate(obj):
            _flatten(f"{prefix}{i + 1}.", v, rows)
    else:
        rows.append([prefix[:-1], str(obj)])


def input_rows(fields: Sequence[Dict], values: Dict) -> List[List[str]]:
    """``[[label, value]]`` for the PDF inputs table, rows fields flattened."""
    rows: List[List[str]] = []
    for f in fields:
        if f["name"] not in values:
            continue
        value = values[f["name"]]
        if f["kind"] == "rows":
            _flatten(f"{f['label']} ", value, rows)
        elif f["kind"] == "select":
            rows.append([f["label"], str(f["labels"].get(value, value))])
        elif value is None:
            rows.append([f["label"], fmt("text", value)])
        else:
            rows.append([f["label"], str(value)])
    return rows


def build_pdf(tool: Dict, fields: Sequence[Dict], values: Dict, result: Dict, metrics) -> bytes:
    """Create a PDF report showing a tool's inputs and results."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, leftMargin=36, rightMargin=36)
    styles = getSampleStyleSheet()
    story = [
        Paragraph(tool["title"], styles["Title"]),
        Paragraph(f"Generated {date.today().isoformat()}", styles["Normal"]),
        Spacer(1, 12),
    ]

    story.append(Paragraph("Inputs", styles["Heading2"]))
    table = Table([["Field", "Value"]] + input_rows(fields, values), hAlign="LEFT")
    table.setStyle(TABLE_STYLE)
    story.extend([table, Spacer(1, 12)])

    story.append(Paragraph("Results", styles["Heading2"]))
    result_rows = [[label, fmt(kind, result[key])] for key, label, kind in metrics if key in result]
    table = Table([["Result", "Value"]] + result_rows, hAlign="LEFT")
    table.setStyle(TABLE_STYLE)
    story.extend([table, Spacer(1, 18)])

    story.append(Paragraph(DISCLAIMER, styles["Italic"]))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


def _jsonable(obj):
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    return obj


def result_json(tool: Dict, values: Dict, result: Dict) -> str:
    """Inputs and outputs as indented JSON. Non-finite numbers become ``null``."""
    payload = {"tool": tool["slug"], "title": tool["title"], "inputs": values, "result": result}
    return json.dumps(_jsonable(payload), indent=2, default=str)
