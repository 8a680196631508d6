"""Card rank and suit definitions and utilities.

Rank values follow the usual card face: 1 is the Ace, 2-10 are pips,
11-13 are Jack, Queen and King. The Ace is also treated as 14 (ace-high)
when looking for straights.

This module provides:
- Rank and suit constants
- Card representation
- Counting, sequence and deck utilities
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Union

from .errors import InvalidSuit


class Rank(IntEnum):
    """Card ranks by face value. The Ace is low (1) unless mapped with ace_high()."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


# Value of the Ace when it plays above the King
ACE_HIGH = 14

MIN_RANK = int(Rank.ACE)
MAX_RANK = int(Rank.KING)


class Suit(str, Enum):
    """Card suits. Declaration order gives the suit ordinal (0-3)."""

    CLUB = "club"
    SPADE = "spade"
    DIAMOND = "diamond"
    HEART = "heart"

    @property
    def ordinal(self) -> int:
        return _SUIT_INDEX[self]

    @classmethod
    def parse(cls, value: Union["Suit", str]) -> "Suit":
        """Resolve a suit from a Suit or a case-insensitive suit name.

        Raises:
            InvalidSuit: If the value is not one of the four suits
        """
        if isinstance(value, Suit):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidSuit(f"Invalid suit: {value!r} (expected one of {[s.value for s in cls]})")


_SUIT_INDEX = {suit: i for i, suit in enumerate(Suit)}

NUM_SUITS = len(Suit)
NUM_RANKS = len(Rank)
DECK_SIZE = NUM_SUITS * NUM_RANKS

# Rank symbols for display
RANK_SYMBOLS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Suit symbols for display
SUIT_SYMBOLS = {
    Suit.CLUB: "♣",
    Suit.SPADE: "♠",
    Suit.DIAMOND: "♦",
    Suit.HEART: "♥",
}


@dataclass(frozen=True)
class Card:
    """A playing card with rank and suit.

    Values are stored as given; the classifier validates and normalizes
    them, so a card built from bad input fails there with a typed error.
    Immutable and hashable for use in sets.
    """

    rank: int
    suit: Union[Suit, str]

    def __str__(self) -> str:
        rank = RANK_SYMBOLS.get(self.rank, str(self.rank))
        suit = self.suit
        if isinstance(suit, str) and suit.lower() in _SUIT_VALUES:
            suit = SUIT_SYMBOLS[Suit(suit.lower())]
        return f"{rank}{suit}"

    def __repr__(self) -> str:
        return f"Card({self})"


_SUIT_VALUES = frozenset(s.value for s in Suit)


def ace_high(rank: int) -> int:
    """Map the Ace (1) to 14; every other rank is returned unchanged."""
    return ACE_HIGH if rank == Rank.ACE else int(rank)


def are_consecutive(ranks: List[int]) -> bool:
    """Check if a sorted list of unique ranks are consecutive.

    Args:
        ranks: List of ranks (should be sorted and unique)

    Returns:
        True if each rank is exactly one above the previous one
    """
    for i in range(1, len(ranks)):
        if int(ranks[i]) - int(ranks[i - 1]) != 1:
            return False
    return True


def get_rank_counts(ranks: List[int]) -> Dict[int, int]:
    """Count occurrences of each rank value.

    Args:
        ranks: List of rank values

    Returns:
        Dict mapping rank to count
    """
    counts: Dict[int, int] = {}
    for rank in ranks:
        counts[rank] = counts.get(rank, 0) + 1
    return counts


# Card encoding: 0-51 for a standard deck (4 suits × 13 ranks)
# card_idx = suit_index * 13 + (rank - 1)
def card_to_idx(card: Card) -> int:
    """Convert a Card to index 0-51."""
    return Suit.parse(card.suit).ordinal * NUM_RANKS + int(card.rank) - MIN_RANK


def idx_to_card(idx: int) -> Card:
    """Convert index 0-51 to a Card.

    Raises:
        ValueError: If the index is outside 0-51
    """
    if not 0 <= idx < DECK_SIZE:
        raise ValueError(f"Card index {idx} out of range [0, {DECK_SIZE})")
    suit = list(Suit)[idx // NUM_RANKS]
    rank = Rank(idx % NUM_RANKS + MIN_RANK)
    return Card(rank=rank, suit=suit)


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck, ordered by card index."""
    return [idx_to_card(idx) for idx in range(DECK_SIZE)]


def sort_cards(cards: List[Card]) -> List[Card]:
    """Sort cards by rank (ascending, Ace low), then by suit index."""
    return sorted(cards, key=lambda c: (int(c.rank), Suit.parse(c.suit).ordinal))
