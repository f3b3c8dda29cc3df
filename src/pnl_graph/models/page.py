from typing import Any, List, Optional

from pydantic import BaseModel, Field


class Page(BaseModel):
    """A window of an aggregated series sized for one bar chart"""
    items: List[Any] = Field(default_factory=list)
    total_pages: int = 0
    current_page: Optional[int] = None

    @property
    def has_previous(self) -> bool:
        return self.current_page is not None and self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page is not None and self.current_page < self.total_pages - 1
