# components/forms.py
import streamlit as st

# Fields are plain dicts so each tool's form can be declared as a list in the
# registry. Widget keys are stable: in_<slug>_<field>.


def widget_key(slug: str, name: str) -> str:
    return f"in_{slug}_{name}"


def rows_key(slug: str, name: str) -> str:
    return f"rows_{slug}_{name}"


def number_field(name, label, default, step=1.0, min_value=0.0, max_value=None, help=None, format=None):
    return {"kind": "number", "name": name, "label": label, "default": float(default), "step": float(step),
            "min_value": min_value, "max_value": max_value, "help": help, "format": format}


def int_field(name, label, default, min_value=0, max_value=None, help=None):
    return {"kind": "int", "name": name, "label": label, "default": int(default),
            "min_value": min_value, "max_value": max_value, "help": help}


def select_field(name, label, options, default=None, labels=None, help=None):
    options = list(options)
    return {"kind": "select", "name": name, "label": label, "options": options,
            "default": default if default is not None else options[0],
            "labels": labels or {}, "help": help}


def checkbox_field(name, label, default=False, help=None):
    return {"kind": "checkbox", "name": name, "label": label, "default": bool(default), "help": help}


def optional_number_field(name, label, step=0.01, help=None):
    """Number that may be left blank; blank reads back as ``None``."""
    return {"kind": "optional_number", "name": name, "label": label, "default": None,
            "step": float(step), "help": help}


def rows_field(name, label, columns, default_rows, add_label="Add row"):
    """Editable list of rows, e.g. debts or transfer providers.

    ``columns`` holds ``text_field``/``number_field`` dicts for one row.
    """
    return {"kind": "rows", "name": name, "label": label, "columns": list(columns),
            "default": [dict(r) for r in default_rows], "add_label": add_label}


def text_field(name, label, default=""):
    return {"kind": "text", "name": name, "label": label, "default": str(default)}


# ---------- Defaults ----------
def _d(slug, name, fallback):
    return st.session_state.get("form_defaults", {}).get(slug, {}).get(name, fallback)


def coerce(field, raw):
    """Convert a raw string (e.g. a query parameter) to the field's type.

    Returns ``None`` when the value does not fit the field.
    """
    kind = field["kind"]
    try:
        if kind in ("number", "optional_number"):
            value = float(raw)
        elif kind == "int":
            value = int(float(raw))
        elif kind == "checkbox":
            value = str(raw).strip().lower() in ("1", "true", "yes", "on")
        elif kind == "select":
            for option in field["options"]:
                if str(option) == str(raw):
                    return option
            return None
        else:
            return None
    except (TypeError, ValueError):
        return None
    if kind in ("number", "int", "optional_number"):
        lo = field.get("min_value")
        hi = field.get("max_value")
        if (lo is not None and value < lo) or (hi is not None and value > hi):
            return None
    return value


def defaults_from_params(fields, params):
    """Field values found in a mapping of query parameters."""
    out = {}
    for f in fields:
        if f["name"] in params:
            value = coerce(f, params[f["name"]])
            if value is not None:
                out[f["name"]] = value
    return out


def default_values(fields):
    return {f["name"]: f["default"] for f in fields}


# ---------- Rendering ----------
def _render_rows(slug, field):
    key = rows_key(slug, field["name"])
    if key not in st.session_state:
        st.session_state[key] = [dict(r) for r in _d(slug, field["name"], field["default"])]
    rows = st.session_state[key]
    columns = field["columns"]

    st.markdown(f"**{field['label']}**")

    # Handle add before rendering so the new row appears immediately
    if st.button(f"➕ {field['add_label']}", key=f"{key}_add"):
        rows.append({c["name"]: c["default"] for c in columns})
        st.session_state[key] = rows
        st.rerun()

    if rows:
        st.markdown(" | ".join(f"**{c['label']}**" for c in columns))

    remove_idx = []
    for i, row in enumerate(rows):
        cells = st.columns([1] * len(columns) + [0.3], gap="small")
        new_row = {}
        for cell, c in zip(cells, columns):
            ckey = f"{key}_{c['name']}_{i}"
            if c["kind"] == "text":
                new_row[c["name"]] = cell.text_input(
                    c["label"], value=str(row.get(c["name"], c["default"])),
                    key=ckey, label_visibility="collapsed",
                )
            else:
                new_row[c["name"]] = float(cell.number_input(
                    c["label"], value=float(row.get(c["name"], c["default"])),
                    min_value=c["min_value"], step=c["step"],
                    key=ckey, label_visibility="collapsed",
                ))
        if cells[-1].button("✖", key=f"{key}_del_{i}"):
            remove_idx.append(i)
        rows[i] = new_row

    if remove_idx:
        for idx in reversed(remove_idx):
            rows.pop(idx)
        st.session_state[key] = rows
        st.rerun()

    return list(rows)


def _render_field(slug, f):
    key = widget_key(slug, f["name"])
    kind = f["kind"]
    if kind == "number":
        return float(st.number_input(
            f["label"],
            min_value=f["min_value"], max_value=f["max_value"],
            value=float(_d(slug, f["name"], f["default"])),
            step=f["step"], format=f["format"],
            key=key, help=f["help"],
        ))
    if kind == "int":
        return int(st.number_input(
            f["label"],
            min_value=f["min_value"], max_value=f["max_value"],
            value=int(_d(slug, f["name"], f["default"])),
            step=1,
            key=key, help=f["help"],
        ))
    if kind == "optional_number":
        raw = st.text_input(
            f["label"],
            value="" if _d(slug, f["name"], None) is None else str(_d(slug, f["name"], None)),
            key=key, help=f["help"], placeholder="Leave blank to skip",
        )
        return coerce(f, raw) if raw.strip() else None
    if kind == "select":
        options = f["options"]
        default = _d(slug, f["name"], f["default"])
        return st.selectbox(
            f["label"], options,
            index=options.index(default) if default in options else 0,
            format_func=lambda o: f["labels"].get(o, o),
            key=key, help=f["help"],
        )
    if kind == "checkbox":
        return bool(st.checkbox(f["label"], value=bool(_d(slug, f["name"], f["default"])), key=key, help=f["help"]))
    if kind == "text":
        return st.text_input(f["label"], value=_d(slug, f["name"], f["default"]), key=key)
    raise ValueError(f"Unknown field kind: {kind}")


def tool_form(slug, fields):
    """Render a tool's inputs in the main area and return ``{name: value}``."""
    values = {}
    simple = [f for f in fields if f["kind"] != "rows"]
    cols = st.columns(2) if len(simple) > 1 else [st.container()]
    for i, f in enumerate(simple):
        with cols[i % len(cols)]:
            values[f["name"]] = _render_field(slug, f)
    for f in fields:
        if f["kind"] == "rows":
            values[f["name"]] = _render_rows(slug, f)
    return values
