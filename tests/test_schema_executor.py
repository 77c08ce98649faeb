import pytest
from pydantic import ValidationError

from askchart.core.errors import ExecutionError, SchemaError
from askchart.schemas.chart import ChartConfig, ChartType
from askchart.schemas.sql import ValidationResult
from askchart.services.executor import check_chart_keys, run_readonly_sql
from askchart.services.schema import get_table_schema
from askchart.services.validator import validate_sql


def test_schema_follows_column_order(session):
    schema = get_table_schema(session)
    assert [c.name for c in schema] == [
        "id", "product_name", "category", "region", "price", "quantity", "sales_date",
    ]


def test_schema_types_and_primary_key(session):
    schema = {c.name: c for c in get_table_schema(session)}
    assert schema["id"].is_primary_key
    assert not any(c.is_primary_key for name, c in schema.items() if name != "id")
    assert schema["sales_date"].data_type == "date"
    assert schema["quantity"].data_type == "integer"


def test_schema_columns_are_immutable(session):
    col = get_table_schema(session)[0]
    with pytest.raises(ValidationError):
        col.name = "other"


def test_unknown_table_is_a_schema_error(session):
    with pytest.raises(SchemaError):
        get_table_schema(session, table="no_such_table")


def test_executor_returns_row_mappings(session):
    validation = validate_sql(session, "SELECT product_name, quantity FROM sales_data ORDER BY id")
    rows = run_readonly_sql(session, validation)
    assert rows[0] == {"product_name": "Laptop", "quantity": 2}
    assert len(rows) == 5


def test_executor_refuses_rejected_statements(session):
    rejected = ValidationResult.reject("DELETE FROM sales_data", "Only SELECT queries are allowed")
    with pytest.raises(ExecutionError):
        run_readonly_sql(session, rejected)


def test_execution_fault_is_wrapped(session):
    # bypasses the validator on purpose to simulate a fault after approval
    forged = ValidationResult.ok("SELECT * FROM vanished_table")
    with pytest.raises(ExecutionError):
        run_readonly_sql(session, forged)


def _config(chart_type="bar-chart", data_key="total", category_key="category"):
    return ChartConfig(type=chart_type, title="t", description="d",
                       data_key=data_key, category_key=category_key)


def test_chart_keys_present_are_left_alone():
    config = _config()
    assert check_chart_keys(config, [{"category": "A", "total": 1}]) is config


def test_chart_keys_without_rows_are_not_checked():
    config = _config(data_key="ghost")
    assert check_chart_keys(config, []).type is ChartType.BAR_CHART


def test_missing_category_key_downgrades_to_table():
    config = _config(category_key="region")
    assert check_chart_keys(config, [{"category": "A", "total": 1}]).type is ChartType.TABLE


def test_missing_key_with_requested_type_is_kept():
    config = _config(data_key="ghost")
    out = check_chart_keys(config, [{"category": "A", "total": 1}], requested=ChartType.BAR_CHART)
    assert out.type is ChartType.BAR_CHART
