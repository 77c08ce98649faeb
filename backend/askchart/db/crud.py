from typing import List
from sqlmodel import select
from .models import SalesRecord
from sqlmodel import Session

def list_sales(session: Session, limit: int = 5) -> List[SalesRecord]:
    return session.exec(select(SalesRecord).order_by(SalesRecord.id).limit(limit)).all()
