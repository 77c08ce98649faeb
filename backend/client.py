# backend/client.py
import requests

API = "http://localhost:8000/api/v1"  # adjust if running on docker-compose

def test_health():
    r = requests.get(f"{API}/health")
    print("Health:", r.status_code, r.json())

def test_preview():
    r = requests.get(f"{API}/sales", params={"limit": 5})
    print("Preview:", r.status_code, r.json())

def test_raw_query():
    r = requests.post(f"{API}/sales", json={"query": "SELECT category, COUNT(*) AS n FROM sales_data GROUP BY category"})
    print("Raw query:", r.status_code, r.json())

def test_nl_to_sql():
    r = requests.post(f"{API}/nl-to-sql", json={"query": "Show top 5 expensive products"})
    print("NL to SQL:", r.status_code, r.json())

def test_generate_chart():
    for payload in (
        {"query": "What's the total revenue?"},
        {"query": "Show sales by category"},
        {"query": "Quarterly sales", "chartType": "table"},
    ):
        r = requests.post(f"{API}/generate-chart", json=payload)
        print("Chart:", payload, r.status_code, r.json())

def test_rejects_injection():
    r = requests.post(f"{API}/sales", json={"query": "SELECT * FROM sales_data; DROP TABLE sales_data"})
    print("Injection:", r.status_code, r.json())

if __name__ == "__main__":
    print("--- Testing askchart backend ---")
    test_health()
    test_preview()
    test_raw_query()
    test_nl_to_sql()
    test_generate_chart()
    test_rejects_injection()
