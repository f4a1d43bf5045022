"""Custom exception classes for the recommendation engine.

Each exception carries an error code from the catalog in errors.py so the
API layer can turn it into a consistent response.
"""

from typing import Any


class RecommendationEngineError(Exception):
    """Base exception for all engine errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CAT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class InvalidCategoryError(RecommendationEngineError):
    """Raised when a category outside the canonical set is ranked.

    This is a caller contract violation. It is never raised because no
    card matches a valid category.
    """

    def __init__(self, category: object):
        super().__init__(
            error_code="CAT_001",
            details={"category": repr(category)},
            http_status=400,
        )
        self.category = category


class CatalogLoadError(RecommendationEngineError):
    """Raised when a card catalog snapshot is structurally invalid.

    Common causes:
    - Unreadable or non-JSON catalog file
    - Card entry without a rules list
    - Negative or non-numeric annual fee or multiplier
    """

    def __init__(self, reason: str, card_id: str | None = None):
        details: dict[str, Any] = {"reason": reason}
        if card_id is not None:
            details["card_id"] = card_id
        super().__init__(error_code="CATALOG_001", details=details, http_status=500)
        self.reason = reason
        self.card_id = card_id

    def __str__(self) -> str:
        if self.card_id:
            return f"{self.error_code}: {self.card_id}: {self.reason}"
        return f"{self.error_code}: {self.reason}"
