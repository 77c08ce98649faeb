from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from .chart import ChartConfig, ChartType
from .sql import SchemaColumn

class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

class GenerationRequest(_CamelModel):
    natural_language_query: str = Field(alias="naturalLanguageQuery")
    columns: List[SchemaColumn] = Field(alias="schema")
    requested_chart_type: Optional[ChartType] = Field(default=None, alias="requestedChartType")

class ChartRequest(_CamelModel):
    query: Optional[str] = None
    chart_type: Optional[ChartType] = Field(default=None, alias="chartType")

class ChartResponse(_CamelModel):
    sql_query: str = Field(alias="sqlQuery")
    chart_config: ChartConfig = Field(alias="chartConfig")
    data: List[dict[str, Any]]
    natural_language_query: str = Field(alias="naturalLanguageQuery")

class NLQuery(_CamelModel):
    query: Optional[str] = None

class SQLResponse(_CamelModel):
    sql_query: str = Field(alias="sqlQuery")
    natural_language_query: str = Field(alias="naturalLanguageQuery")
    columns: List[SchemaColumn] = Field(alias="schema")

class RawQuery(_CamelModel):
    query: Optional[str] = None

class ErrorResponse(_CamelModel):
    error: str
    details: Optional[str] = None
    generated_sql: Optional[str] = Field(default=None, alias="generatedSQL")
