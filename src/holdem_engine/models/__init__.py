"""Data models for the Hold'em engine."""

from holdem_engine.models.card import Card, Rank, Suit
from holdem_engine.models.action import ActionType, Street, PlayerAction
from holdem_engine.models.table import (
    TableConfig, SeatStatus, Seat, SeatView, TableSnapshot, HandResult
)

__all__ = [
    "Card", "Rank", "Suit",
    "ActionType", "Street", "PlayerAction",
    "TableConfig", "SeatStatus", "Seat", "SeatView", "TableSnapshot", "HandResult",
]
