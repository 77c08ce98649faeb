import os, requests, streamlit as st

API = os.getenv("API_URL", "http://localhost:8000/api/v1")
CHART_TYPES = ["auto", "number-card", "bar-chart", "line-chart", "pie-chart",
               "area-chart", "donut-chart", "radial-chart", "table"]

st.set_page_config(page_title="askchart", layout="wide")
st.title("askchart: ask your sales data")

with st.form("chart"):
    q = st.text_input("Question", placeholder="e.g., Show total revenue by category")
    chart_type = st.selectbox("Chart type", CHART_TYPES)
    if st.form_submit_button("Generate"):
        payload = {"query": q}
        if chart_type != "auto":
            payload["chartType"] = chart_type
        r = requests.post(f"{API}/generate-chart", json=payload, timeout=120)
        body = r.json()
        if r.ok:
            st.code(body["sqlQuery"], language="sql")
            st.json(body["chartConfig"])
            st.dataframe(body["data"], use_container_width=True)
        else:
            st.error(body.get("error"))
            if body.get("details"):
                st.caption(body["details"])

st.subheader("Just the SQL")
sq = st.text_input("e.g., Show top 5 expensive products")
if st.button("Translate"):
    r = requests.post(f"{API}/nl-to-sql", json={"query": sq}, timeout=120)
    st.write(r.json())

st.subheader("Table preview")
if st.button("Refresh"):
    r = requests.get(f"{API}/sales")
    st.dataframe(r.json(), use_container_width=True)
