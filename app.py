# app.py
import streamlit as st

import catalog
from calculators import InvalidInput
from components.export import DISCLAIMER, build_pdf, result_json
from components.forms import default_values, defaults_from_params, tool_form
from components.registry import get_entry, run
from components.results import show_metrics, show_table, table_frame
from config import settings
from utils import get_perf_logger, setup_logger

logger = setup_logger("toolphi")


# ---------- Page config ----------
st.set_page_config(
    page_title=settings.site_name,
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="auto",
)

# Hide Streamlit's default menu and footer
HIDE_STREAMLIT_STYLE = """
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
    </style>
"""
st.markdown(HIDE_STREAMLIT_STYLE, unsafe_allow_html=True)

# ---------- UI polish ----------
st.markdown(
    """
<style>
/* Global layout */
.block-container {
    padding: 1.5rem 2rem;
    max-width: 1200px;
    margin: auto;
}

/* Sidebar styling */
section[data-testid="stSidebar"] {
    background-color: #E6ECE9;
    padding: 1.5rem;
    border-right: 1px solid #D1D9D6;
}
section[data-testid="stSidebar"] h2,
section[data-testid="stSidebar"] h3 {
    color: #18453B;
    font-weight: 600;
    margin: 0.5rem 0;
}

/* Cards for metrics and charts */
div[data-testid="stMetric"] {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 1rem;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
    border: 1px solid #E6ECE9;
}
div.stPlotlyChart {
    background: #FFFFFF;
    border-radius: 12px;
    padding: 0.75rem;
    border: 1px solid #E6ECE9;
    box-shadow: 0 2px 8px rgba(0,0,0,0.05);
}

/* Buttons */
button[kind="primary"] {
    background-color: #18453B;
    color: #FFFFFF;
    border-radius: 8px;
    border: none;
}
button[kind="primary"]:hover {
    background-color: #2E6B5E;
}
.stButton>button {
    border-radius: 8px;
    border: 1px solid #D1D9D6;
}

/* Typography */
h1, h2, h3, h4 {
    color: #1A2521;
    font-weight: 600;
}

/* Tables */
div[data-testid="stDataFrame"] {
    border-radius: 12px;
    overflow: hidden;
}

/* Mobile tweaks */
@media (max-width: 600px) {
    .block-container {
        padding: 1rem;
    }
    div.stPlotlyChart {
        padding: 0.5rem 0;
    }
}
</style>
""",
    unsafe_allow_html=True,
)

# ---------- Session boot ----------
st.session_state.setdefault("form_defaults", {})   # slug -> {field: value}
st.session_state.setdefault("selected_tool", None)
st.session_state.setdefault("params_applied", None)
st.session_state.setdefault("results", {})         # slug -> {"values", "result"}
st.session_state.setdefault("auto_run", True)
st.session_state.setdefault("run_now", False)

tools = catalog.all_tools()
categories = catalog.all_categories()


# ---------- Deep links: ?tool=<slug>&<field>=<value> ----------
params = {k: st.query_params[k] for k in st.query_params.keys()}
linked = params.get("tool")
if linked and catalog.get_tool(linked) is None:
    logger.info(f"Unknown tool in link: {linked}")
    linked = None

if linked and st.session_state["params_applied"] != params:
    entry = get_entry(linked)
    prefill = defaults_from_params(entry["fields"], params) if entry else {}
    if prefill:
        st.session_state["form_defaults"][linked] = {**default_values(entry["fields"]), **prefill}
    st.session_state["selected_tool"] = linked
    st.session_state["params_applied"] = params

if st.session_state["selected_tool"] is None:
    st.session_state["selected_tool"] = tools[0]["slug"]


# ====== SIDEBAR: FIND A CALCULATOR ======
st.sidebar.header(settings.site_name)
st.sidebar.caption("Free calculators for loans, savings, taxes, currency, energy, business and health insurance.")

category_ids = ["all"] + [c["id"] for c in categories]
category_names = {"all": "All categories", **{c["id"]: c["name"] for c in categories}}
category = st.sidebar.selectbox("Category", category_ids, format_func=lambda c: category_names[c])
query = st.sidebar.text_input("Search", placeholder="e.g. mortgage, dividend, crack spread")

matches = catalog.search_tools(query)
if category != "all":
    matches = [t for t in matches if t["category"] == category]

current = st.session_state["selected_tool"]
if not matches:
    st.sidebar.info("No calculators match your search.")
else:
    options = [t["slug"] for t in matches]
    titles = {t["slug"]: t["title"] for t in matches}
    chosen = st.sidebar.selectbox(
        "Calculator",
        options,
        index=options.index(current) if current in options else 0,
        format_func=lambda s: titles[s],
    )
    if chosen != current:
        st.session_state["selected_tool"] = chosen
        st.query_params.clear()
        st.query_params["tool"] = chosen
        st.session_state["params_applied"] = {"tool": chosen}
        st.rerun()

slug = st.session_state["selected_tool"]
tool = catalog.get_tool(slug)
entry = get_entry(slug)

st.sidebar.divider()
st.sidebar.caption(f"{len(tools)} calculators in {len(categories)} categories.")


# ---------- Header ----------
group = catalog.get_category(tool["category"])
st.caption(group["name"] if group else tool["category"])
st.title(tool["title"])
st.markdown(tool["description"])

if entry is None:
    logger.error(f"No calculator registered for {slug}")
    st.error("This calculator is not available right now.")
    st.stop()


# ====== INPUTS ======
st.subheader("Inputs")
values = tool_form(slug, entry["fields"])

left, right = st.columns(2)
with left:
    st.session_state["auto_run"] = st.checkbox("Auto calculate", value=st.session_state["auto_run"])
with right:
    if st.button("Calculate", type="primary"):
        st.session_state["run_now"] = True


# ====== RUN ======
if st.session_state["run_now"] or st.session_state["auto_run"]:
    st.session_state["run_now"] = False
    try:
        with get_perf_logger(logger, f"calculate {slug}"):
            result = run(slug, values)
    except InvalidInput as exc:
        logger.info(f"Rejected input: {exc}", extra={"tool": slug})
        st.session_state["results"].pop(slug, None)
        st.warning(str(exc))
    else:
        st.session_state["results"][slug] = {"values": values, "result": result}

stored = st.session_state["results"].get(slug)
if stored is None:
    st.info("Enter your numbers and press Calculate to see results.")
    st.stop()

result = stored["result"]
if stored["values"] != values:
    st.caption("Inputs changed since the last calculation. Press Calculate to update.")


# ====== DISPLAY ======
st.divider()
st.subheader("Results")
show_metrics(result, entry["metrics"])

figs = entry["charts"](result, stored["values"])
if figs:
    cols = st.columns(len(figs)) if len(figs) > 1 else [st.container()]
    for col, fig in zip(cols, figs):
        with col:
            st.plotly_chart(fig, use_container_width=True)

table = entry["table"](result)
if table:
    show_table(
        table_frame(table["rows"], table["columns"]),
        slug,
        title=table["title"],
        preview_rows=settings.schedule_preview_rows,
    )

# --- Export ---
st.divider()
c1, c2 = st.columns(2)
with c1:
    st.download_button(
        "⬇️ Download JSON",
        data=result_json(tool, stored["values"], result),
        file_name=f"{slug}.json",
        mime="application/json",
    )
with c2:
    st.download_button(
        "⬇️ Download PDF",
        data=build_pdf(tool, entry["fields"], stored["values"], result, entry["metrics"]),
        file_name=f"{slug}.pdf",
        mime="application/pdf",
    )
st.caption(f"Share this calculator: {settings.tool_url(slug)}")

# --- Related tools ---
related = catalog.related_tools(tool)
if related:
    st.subheader("Related calculators")
    for t in related:
        st.markdown(f"- [{t['title']}](?tool={t['slug']}): {t['description']}")

st.divider()
st.caption(DISCLAIMER)
