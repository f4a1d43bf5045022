"""Rewardwise: card reward recommendations and debt insights."""

__version__ = "0.1.0"
