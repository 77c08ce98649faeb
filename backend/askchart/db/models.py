from datetime import date
from typing import Optional
from sqlmodel import SQLModel, Field
from ..core.config import settings

class SalesRecord(SQLModel, table=True):
    __tablename__ = settings.TARGET_TABLE

    id: Optional[int] = Field(default=None, primary_key=True)
    product_name: str
    category: str = Field(index=True)
    region: Optional[str] = None
    price: float
    quantity: int
    sales_date: date = Field(index=True)  # stored as YYYY-MM-DD
