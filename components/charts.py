# components/charts.py
# Plotly chart helpers used across the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

LAYOUT = dict(
    template="plotly_white",
    height=380,
    margin=dict(l=10, r=10, t=40, b=10),
    legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
)


# ---------- Loan balance over time ----------
def balance_chart(schedule: Sequence[Dict],
                  title: str = "Loan Balance Over Time",
                  baseline: Optional[Sequence[Dict]] = None) -> go.Figure:
    """Remaining balance by month, with an optional baseline schedule for comparison."""
    fig = go.Figure()
    if baseline:
        fig.add_trace(go.Scatter(
            x=[r["month"] for r in baseline], y=[r["balance"] for r in baseline],
            mode="lines", name="Without extra", line=dict(dash="dot"),
            hovertemplate="Month %{x}<br>$%{y:,.0f}<extra></extra>"
        ))
    fig.add_trace(go.Scatter(
        x=[r["month"] for r in schedule], y=[r["balance"] for r in schedule],
        mode="lines", name="Balance", fill="tozeroy",
        hovertemplate="Month %{x}<br>$%{y:,.0f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="Month", yaxis_title="Dollars", **LAYOUT)
    return fig


# ---------- Interest vs principal (stacked bars by year) ----------
def yearly_split(schedule: Sequence[Dict]) -> Dict[str, List[float]]:
    """Sum a monthly schedule into per-year interest and principal."""
    years: List[int] = []
    interest: List[float] = []
    principal: List[float] = []
    for r in schedule:
        y = (int(r["month"]) - 1) // 12 + 1
        if not years or years[-1] != y:
            years.append(y)
            interest.append(0.0)
            principal.append(0.0)
        interest[-1] += r["interest"]
        principal[-1] += r["principal"] + r.get("extra", 0.0)
    return {"year": years, "interest": interest, "principal": principal}


def split_chart(schedule: Sequence[Dict], title: str = "Interest vs Principal by Year") -> go.Figure:
    data = yearly_split(schedule)
    fig = go.Figure()
    fig.add_bar(x=data["year"], y=data["principal"], name="Principal")
    fig.add_bar(x=data["year"], y=data["interest"], name="Interest")
    fig.update_layout(barmode="stack", title=title, xaxis_title="Year", yaxis_title="Dollars", **LAYOUT)
    return fig


# ---------- Growth path against a target ----------
def growth_chart(path: Sequence[float],
                 target: Optional[float] = None,
                 title: str = "Projected Balance",
                 x_title: str = "Year") -> go.Figure:
    """Balance path with a horizontal target line when one is given."""
    x = list(range(len(path)))
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x, y=list(path), mode="lines+markers" if len(path) <= 60 else "lines", name="Balance",
        hovertemplate=f"{x_title} %{{x}}<br>$%{{y:,.0f}}<extra></extra>"
    ))
    if target is not None:
        fig.add_trace(go.Scatter(
            x=[x[0], x[-1]] if x else [0, 0], y=[target, target], mode="lines", name="Target",
            line=dict(dash="dash"),
            hovertemplate="Target $%{y:,.0f}<extra></extra>"
        ))
    fig.update_layout(title=title, xaxis_title=x_title, yaxis_title="Dollars", **LAYOUT)
    return fig


# ---------- Cost comparison ----------
def comparison_bars(labels: Sequence[str],
                    values: Sequence[float],
                    title: str = "Cost Comparison",
                    y_title: str = "Dollars",
                    highlight: Optional[str] = None) -> go.Figure:
    """One bar per option; ``highlight`` names the bar drawn in the accent colour."""
    colors = ["#18453B" if lbl == highlight else "#9DB3AB" for lbl in labels]
    fig = go.Figure(go.Bar(
        x=list(labels), y=list(values), marker_color=colors,
        hovertemplate="%{x}<br>%{y:,.2f}<extra></extra>"
    ))
    fig.update_layout(title=title, xaxis_title="", yaxis_title=y_title, showlegend=False,
                      **{k: v for k, v in LAYOUT.items() if k != "legend"})
    return fig
