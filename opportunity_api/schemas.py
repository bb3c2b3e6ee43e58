from typing import Any
from pydantic import BaseModel

class Filter(BaseModel):
    id: str
    type: str
    value: str

class FilteredSearchIn(BaseModel):
    filters: list[Filter] = []

class OpportunityOut(BaseModel):
    id: str
    title: str
    opportunityData: str

class HintOut(BaseModel):
    name: str
    type: str
    values: list[Any]
