from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class SchemaColumn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    data_type: str = Field(alias="dataType")
    is_primary_key: bool = Field(default=False, alias="isPrimaryKey")

class ValidationResult(BaseModel):
    valid: bool
    sql: str
    error: Optional[str] = None

    @classmethod
    def ok(cls, sql: str) -> "ValidationResult":
        return cls(valid=True, sql=sql)

    @classmethod
    def reject(cls, sql: str, error: str) -> "ValidationResult":
        return cls(valid=False, sql=sql, error=error)
