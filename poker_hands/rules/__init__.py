"""Poker rules implementations.

This module provides:
- Card, rank and suit definitions (ranks.py)
- Hand validation errors (errors.py)
- Five-card hand classification (hands.py)
"""

from .ranks import (
    Rank,
    Suit,
    Card,
    ACE_HIGH,
    DECK_SIZE,
    RANK_SYMBOLS,
    SUIT_SYMBOLS,
    ace_high,
    are_consecutive,
    get_rank_counts,
    card_to_idx,
    idx_to_card,
    create_standard_deck,
    sort_cards,
)

from .errors import (
    HandValidationError,
    InvalidHandSize,
    InvalidRank,
    InvalidSuit,
    DuplicateCard,
)

from .hands import (
    HAND_SIZE,
    HandCategory,
    CATEGORY_LABELS,
    RankProfile,
    SequenceInfo,
    get_rank_profile,
    is_flush,
    detect_straight,
    resolve_category,
    validate_hand,
    classify_hand,
    evaluate_poker_hand,
    get_categories,
    describe_categories,
    make_cards_from_ranks,
)

__all__ = [
    # Ranks
    "Rank",
    "Suit",
    "Card",
    "ACE_HIGH",
    "DECK_SIZE",
    "RANK_SYMBOLS",
    "SUIT_SYMBOLS",
    "ace_high",
    "are_consecutive",
    "get_rank_counts",
    "card_to_idx",
    "idx_to_card",
    "create_standard_deck",
    "sort_cards",
    # Hands
    "HAND_SIZE",
    "HandCategory",
    "CATEGORY_LABELS",
    "RankProfile",
    "SequenceInfo",
    "HandValidationError",
    "InvalidHandSize",
    "InvalidRank",
    "InvalidSuit",
    "DuplicateCard",
    "get_rank_profile",
    "is_flush",
    "detect_straight",
    "resolve_category",
    "validate_hand",
    "classify_hand",
    "evaluate_poker_hand",
    "get_categories",
    "describe_categories",
    "make_cards_from_ranks",
]
