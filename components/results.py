# components/results.py
# Result rendering: metric cards, tables and CSV download.

from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from .formatting import fmt

# A metric is (result key, label, formatter kind)
Metric = Tuple[str, str, str]

COLUMN_LABELS = {
    "month": "Month",
    "payment": "Payment",
    "interest": "Interest",
    "principal": "Principal",
    "extra": "Extra",
    "balance": "Balance",
    "years": "Term (years)",
    "monthly_payment": "Monthly payment",
    "total_paid": "Total paid",
    "total_interest": "Total interest",
    "months": "Months",
    "name": "Name",
    "total_cost": "Total cost",
    "cost_rate": "Cost (%)",
    "amount_received": "Amount received",
    "fixed_fee": "Fixed fee",
    "percent_fee_cost": "Percent fee",
    "fx_cost": "FX markup cost",
    "cheapest": "Cheapest",
    "age": "Age",
    "limit": "Limit",
    "year": "Year",
    "value": "Value",
}


def metric_values(result: Dict, metrics: Sequence[Metric]) -> List[Tuple[str, str]]:
    """``[(label, formatted value)]`` for the metrics present in ``result``."""
    out = []
    for key, label, kind in metrics:
        if key in result:
            out.append((label, fmt(kind, result[key])))
    return out


def table_frame(rows: Sequence[Dict], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    df = pd.DataFrame(list(rows))
    if columns:
        df = df[[c for c in columns if c in df.columns]]
    return df.rename(columns=COLUMN_LABELS)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def show_metrics(result: Dict, metrics: Sequence[Metric], per_row: int = 3):
    values = metric_values(result, metrics)
    for start in range(0, len(values), per_row):
        cols = st.columns(per_row)
        for col, (label, value) in zip(cols, values[start:start + per_row]):
            col.metric(label, value)


def show_table(df: pd.DataFrame, slug: str, title: str = "Schedule", preview_rows: int = 24):
    """Table with an expander for long schedules and a CSV download."""
    if df.empty:
        return
    st.subheader(title)
    money_cols = [c for c in df.columns if df[c].dtype.kind == "f"]
    styled = df.style.format({c: "{:,.2f}" for c in money_cols})
    if len(df) > preview_rows:
        st.dataframe(df.head(preview_rows).style.format({c: "{:,.2f}" for c in money_cols}),
                     use_container_width=True, hide_index=True)
        with st.expander(f"Show all {len(df)} rows"):
            st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(styled, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        data=to_csv_bytes(df),
        file_name=f"{slug}-{title.lower().replace(' ', '-')}.csv",
        mime="text/csv",
        key=f"csv_{slug}",
    )
