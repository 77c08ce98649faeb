import json
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
from ..core.config import settings
from ..schemas.chart import ChartType
from ..schemas.sql import SchemaColumn


class Prompt(NamedTuple):
    system: str
    user: str


@dataclass(frozen=True)
class ChartExample:
    query: str
    sql: str  # {table} is filled in at render time
    config: Dict[str, str] = field(default_factory=dict)

    def render(self, table: str) -> str:
        response = {"sqlQuery": self.sql.format(table=table), "chartConfig": self.config}
        return f'Query: "{self.query}"\nResponse:\n{json.dumps(response, indent=2)}'


# worked examples; keep every dataKey/categoryKey bound to an alias of its SQL
CHART_EXAMPLES: Tuple[ChartExample, ...] = (
    ChartExample(
        "What's the total revenue?",
        "SELECT SUM(price * quantity) AS total_revenue FROM {table}",
        {"type": "number-card", "title": "Total Revenue",
         "description": "All-time revenue", "dataKey": "total_revenue"},
    ),
    ChartExample(
        "Show sales by category",
        "SELECT category, SUM(price * quantity) AS total_sales FROM {table} "
        "GROUP BY category ORDER BY total_sales DESC",
        {"type": "bar-chart", "title": "Sales by Category",
         "description": "Total sales broken down by product category",
         "dataKey": "total_sales", "categoryKey": "category"},
    ),
    ChartExample(
        "Sales by month for 2023",
        "SELECT DATE_FORMAT(sales_date, '%Y-%m') AS month, SUM(price * quantity) AS total_sales "
        "FROM {table} WHERE YEAR(sales_date) = 2023 "
        "GROUP BY DATE_FORMAT(sales_date, '%Y-%m') ORDER BY month",
        {"type": "line-chart", "title": "Monthly Sales 2023",
         "description": "Sales trends by month",
         "dataKey": "total_sales", "categoryKey": "month"},
    ),
    ChartExample(
        "Revenue in March 2023",
        "SELECT SUM(price * quantity) AS total_revenue FROM {table} "
        "WHERE YEAR(sales_date) = 2023 AND MONTH(sales_date) = 3",
        {"type": "number-card", "title": "March 2023 Revenue",
         "description": "Total revenue for March 2023", "dataKey": "total_revenue"},
    ),
    ChartExample(
        "Quarterly sales",
        "SELECT CONCAT('Q', QUARTER(sales_date), ' ', YEAR(sales_date)) AS quarter, "
        "SUM(price * quantity) AS total_sales FROM {table} "
        "GROUP BY YEAR(sales_date), QUARTER(sales_date) "
        "ORDER BY YEAR(sales_date), QUARTER(sales_date)",
        {"type": "bar-chart", "title": "Quarterly Sales",
         "description": "Sales by quarter",
         "dataKey": "total_sales", "categoryKey": "quarter"},
    ),
    ChartExample(
        "Annual sales trend",
        "SELECT YEAR(sales_date) AS year, SUM(price * quantity) AS total_sales "
        "FROM {table} GROUP BY YEAR(sales_date) ORDER BY year",
        {"type": "line-chart", "title": "Annual Sales Trend",
         "description": "Sales growth by year",
         "dataKey": "total_sales", "categoryKey": "year"},
    ),
)

SQL_FEWSHOTS: Tuple[Tuple[str, str], ...] = (
    ("Show me all products", "SELECT * FROM {table}"),
    ("Get products with price greater than 100", "SELECT * FROM {table} WHERE price > 100"),
    ("Show top 5 expensive products", "SELECT * FROM {table} ORDER BY price DESC LIMIT 5"),
    ("Find electronics", "SELECT * FROM {table} WHERE category = 'Electronics'"),
)

DATE_RULES = (
    "IMPORTANT DATE FORMAT INFORMATION:\n"
    "- All dates are stored in 'YYYY-MM-DD' format (e.g., '2023-01-15')\n"
    "- NEVER use LIKE '%MonthName%' or substring matching for date filtering\n"
    "- Use proper {dialect} date functions:\n"
    "  * YEAR(date_column) = 2023\n"
    "  * MONTH(date_column) = 1 (for January)\n"
    "  * QUARTER(date_column) = 1\n"
    "  * DATE_FORMAT(date_column, '%Y-%m') = '2023-01'\n"
    "  * DATE_FORMAT(date_column, '%M') = 'January' (for display only)\n"
    "  * WHERE date_column BETWEEN '2023-01-01' AND '2023-01-31'\n"
)

OUTPUT_FORMAT = (
    "Return ONLY a JSON object in this exact format, with no markdown fences and no prose:\n"
    "{\n"
    '  "sqlQuery": "SELECT statement here",\n'
    '  "chartConfig": {\n'
    '    "type": "chart-type",\n'
    '    "title": "Chart Title",\n'
    '    "description": "Brief description",\n'
    '    "dataKey": "column_name_for_values",\n'
    '    "categoryKey": "column_name_for_categories"\n'
    "  }\n"
    "}\n"
)

CHART_SQL_RULES = (
    "Rules for SQL:\n"
    "- Use aggregate functions for number-card (COUNT, SUM, AVG, etc.)\n"
    "- For charts with categories, include GROUP BY\n"
    "- For time series, ensure proper date ordering\n"
    "- Use aliases for clarity (e.g., AS total_sales) and use the alias as dataKey\n"
    "- categoryKey is omitted for number-card\n"
    "- No semicolons\n"
    "- For time-based queries, use proper date functions, NOT string matching\n"
)


def render_schema(schema: Sequence[SchemaColumn], mark_primary: bool = False) -> str:
    lines = []
    for col in schema:
        suffix = " PRIMARY KEY" if mark_primary and col.is_primary_key else ""
        lines.append(f"- {col.name} ({col.data_type}){suffix}")
    return "\n".join(lines)


def render_chart_types() -> str:
    return "\n".join(f"- {t.value}: {t.guidance}" for t in ChartType)


def build_chart_prompt(
    query: str,
    schema: Sequence[SchemaColumn],
    requested_chart_type: Optional[ChartType] = None,
    table: str = settings.TARGET_TABLE,
    dialect: str = settings.SQL_DIALECT,
) -> Prompt:
    if requested_chart_type is not None:
        choice = (f"User requested chart type: {requested_chart_type.value}. "
                  "Use this type and shape the SQL to fit it.")
    else:
        choice = "Suggest the most appropriate chart type."

    examples = "\n\n".join(ex.render(table) for ex in CHART_EXAMPLES)
    system = "\n".join([
        "You are a data visualization expert. Given a natural language query, generate:",
        f"1. A {dialect} SELECT query to get the data",
        "2. A chart configuration specifying the best visualization",
        "",
        f"Database Schema for table '{table}':",
        render_schema(schema),
        "",
        DATE_RULES.format(dialect=dialect),
        "Available chart types:",
        render_chart_types(),
        "",
        choice,
        "",
        OUTPUT_FORMAT,
        CHART_SQL_RULES,
        "Examples:",
        "",
        examples,
    ])
    return Prompt(system=system, user=query)


def build_sql_prompt(
    query: str,
    schema: Sequence[SchemaColumn],
    table: str = settings.TARGET_TABLE,
    dialect: str = settings.SQL_DIALECT,
) -> Prompt:
    rules = [
        "Only generate SELECT queries",
        f"Always use proper SQL syntax for {dialect}",
        "Use appropriate WHERE clauses for filtering",
        "Use ORDER BY for sorting",
        "Use LIMIT for restricting results",
        "Return ONLY the SQL query without any explanation or markdown formatting",
        "Do not include semicolons at the end",
        "Use single quotes for string literals",
        f"Table name is always '{table}'",
        "Be precise and use exact column names from the schema",
    ]
    shots: List[str] = [
        f'Natural: "{q}"\nSQL: {sql.format(table=table)}' for q, sql in SQL_FEWSHOTS
    ]
    system = "\n".join([
        f"You are a SQL expert. Convert natural language queries to valid {dialect} SQL queries.",
        "",
        f"Database Schema for table '{table}':",
        render_schema(schema, mark_primary=True),
        "",
        "Rules:",
        *(f"{i}. {rule}" for i, rule in enumerate(rules, 1)),
        "",
        "Examples:",
        "\n\n".join(shots),
    ])
    return Prompt(system=system, user=query)
