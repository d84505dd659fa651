from dataclasses import dataclass
from typing import Optional

from taxonomy_service.models import FilteredContent, TaxonomyResult


@dataclass
class AnalysisOutcome:
    """Result of a taxonomy request as seen by the web layer."""
    success: bool
    result: Optional[TaxonomyResult] = None
    error: Optional[str] = None
    message: Optional[str] = None
    status: int = 200

    def to_error_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


@dataclass
class FilterOutcome:
    """Result of a content filtering request."""
    success: bool
    filtered: Optional[FilteredContent] = None
    error: Optional[str] = None
    message: Optional[str] = None
    status: int = 200

    def to_error_dict(self) -> dict:
        return {"error": self.error, "message": self.message}
