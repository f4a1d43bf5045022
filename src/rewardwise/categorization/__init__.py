"""Business and transaction categorization.

Rule-based and local (no network calls) so classification is fast,
explainable and reproducible.
"""

from .rules import classify, classify_transaction_category, normalize_tag

__all__ = ["classify", "classify_transaction_category", "normalize_tag"]
