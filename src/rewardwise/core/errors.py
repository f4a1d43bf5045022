"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "CAT_001": {
        "code": "CAT_001",
        "message": "Category is not a member of the canonical reward category set",
        "user_message": "We don't recognize that reward category.",
        "suggestion": "Use one of the categories listed at /api/v1/categories.",
        "retry_allowed": False,
    },
    "CATALOG_001": {
        "code": "CATALOG_001",
        "message": "Card catalog snapshot is invalid and could not be loaded",
        "user_message": "Card reward data is temporarily unavailable.",
        "suggestion": "Please try again later. Contact support if the problem persists.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def error_body(error_code: str, message: str | None = None) -> dict:
    """Build the JSON body returned for an error code."""
    info = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or info["message"],
        "user_message": info["user_message"],
        "suggestion": info["suggestion"],
        "retry_allowed": info["retry_allowed"],
    }
