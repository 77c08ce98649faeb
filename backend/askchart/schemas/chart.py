from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class ChartType(str, Enum):
    NUMBER_CARD = "number-card"
    BAR_CHART = "bar-chart"
    LINE_CHART = "line-chart"
    PIE_CHART = "pie-chart"
    AREA_CHART = "area-chart"
    DONUT_CHART = "donut-chart"
    RADIAL_CHART = "radial-chart"
    TABLE = "table"

    @property
    def guidance(self) -> str:
        return CHART_GUIDANCE[self]

# one line per type, rendered verbatim into the chart prompt
CHART_GUIDANCE = {
    ChartType.NUMBER_CARD: 'Single metric/KPI (e.g., "total sales", "average price")',
    ChartType.BAR_CHART: 'Comparing categories (e.g., "sales by region")',
    ChartType.LINE_CHART: 'Trends over time (e.g., "sales over months")',
    ChartType.AREA_CHART: "Cumulative trends over time",
    ChartType.PIE_CHART: 'Parts of a whole (e.g., "market share by category")',
    ChartType.DONUT_CHART: "Similar to pie chart",
    ChartType.RADIAL_CHART: "Circular progress/comparison",
    ChartType.TABLE: "Detailed data view",
}

class ChartConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: ChartType
    title: str
    description: str
    data_key: str = Field(alias="dataKey")
    category_key: Optional[str] = Field(default=None, alias="categoryKey")
    color: Optional[str] = None

class GeneratedArtifact(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sql_query: str = Field(alias="sqlQuery", min_length=1)
    chart_config: ChartConfig = Field(alias="chartConfig")
