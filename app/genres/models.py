from pydantic import BaseModel
from typing import Any, Dict, List, Optional

class Genre(BaseModel):
    id: int
    name: str

class CategoryPage(BaseModel):
    genre: Optional[Genre]
    page: int
    total_pages: int
    total_results: int
    results: List[Dict[str, Any]]
