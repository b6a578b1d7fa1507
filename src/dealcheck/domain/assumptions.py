# src/dealcheck/domain/assumptions.py
from pydantic import BaseModel

class DealDefaults(BaseModel):
    deposit_percent: float = 25.0
    interest_rate_percent: float = 5.5
    expense_percent: float = 15.0
