"""Five-card poker hand classification.

Categories (weakest to strongest):
- highcard, pair, twopair, threeofakind, straight,
  flush, fullhouse, fourofakind, straightflush, royalflush

Classification runs three independent analyses over the same cards and
then resolves them in a fixed priority order:
- Rank frequencies: counts per rank, sorted descending, and the pair count
- Suit uniformity: all five suits equal (case-insensitive)
- Sequence: five consecutive ranks with the Ace high (14), or the wheel
  A-2-3-4-5 where the Ace plays low and the straight's high card is 5

The resolver checks straight+flush first, so a hand matching several
patterns always gets the strongest category.
"""

from dataclasses import dataclass
from enum import IntEnum
from numbers import Integral
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import (
    DuplicateCard,
    InvalidHandSize,
    InvalidRank,
    InvalidSuit,
)
from .ranks import (
    ACE_HIGH,
    MAX_RANK,
    MIN_RANK,
    Card,
    Rank,
    Suit,
    ace_high,
    are_consecutive,
    get_rank_counts,
)


HAND_SIZE = 5

# The only straight where the Ace plays low
WHEEL_RANKS = [1, 2, 3, 4, 5]
WHEEL_HIGH = 5

# Lowest card of an ace-high straight
ROYAL_LOW = 10


class HandCategory(IntEnum):
    """Hand categories ordered by poker strength (higher value = stronger)."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        """Lowercase label, e.g. "fullhouse"."""
        return CATEGORY_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "HandCategory":
        try:
            return _LABEL_TO_CATEGORY[label.lower()]
        except KeyError:
            raise ValueError(f"Unknown hand category: {label!r}") from None

    def __str__(self) -> str:
        return self.label


CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "highcard",
    HandCategory.PAIR: "pair",
    HandCategory.TWO_PAIR: "twopair",
    HandCategory.THREE_OF_A_KIND: "threeofakind",
    HandCategory.STRAIGHT: "straight",
    HandCategory.FLUSH: "flush",
    HandCategory.FULL_HOUSE: "fullhouse",
    HandCategory.FOUR_OF_A_KIND: "fourofakind",
    HandCategory.STRAIGHT_FLUSH: "straightflush",
    HandCategory.ROYAL_FLUSH: "royalflush",
}

_LABEL_TO_CATEGORY = {v: k for k, v in CATEGORY_LABELS.items()}


# ============================================================================
# Analyses
# ============================================================================


@dataclass(frozen=True)
class RankProfile:
    """Rank frequency facts for one hand.

    Attributes:
        counts: Mapping of rank to number of occurrences
        descending: The counts sorted largest first, e.g. (3, 2) for a full house
        num_pairs: Number of ranks appearing exactly twice
    """

    counts: Dict[int, int]
    descending: Tuple[int, ...]
    num_pairs: int

    @property
    def has_three(self) -> bool:
        return self.descending[0] == 3

    @property
    def has_four(self) -> bool:
        return self.descending[0] == 4


@dataclass(frozen=True)
class SequenceInfo:
    """Straight detection result.

    Attributes:
        is_straight: True for an ace-high run or the wheel
        is_wheel: True only for A-2-3-4-5
        high: High card of the straight (5 for the wheel, otherwise the
            largest ace-high rank)
        low: Smallest ace-high rank
    """

    is_straight: bool
    is_wheel: bool
    high: int
    low: int


def _check_size(ranks: List[int]) -> None:
    if len(ranks) != HAND_SIZE:
        raise InvalidHandSize(f"Expected {HAND_SIZE} ranks, got {len(ranks)}")


def get_rank_profile(ranks: List[int]) -> RankProfile:
    """Count ranks and summarize the counts.

    Raises:
        InvalidHandSize: If there are not exactly 5 ranks
    """
    _check_size(ranks)
    counts = get_rank_counts([int(r) for r in ranks])
    descending = tuple(sorted(counts.values(), reverse=True))
    num_pairs = sum(1 for count in counts.values() if count == 2)
    return RankProfile(counts=counts, descending=descending, num_pairs=num_pairs)


def is_flush(suits: List[Union[Suit, str]]) -> bool:
    """True if every suit matches the first card's suit, ignoring case."""
    normalized = [suit.lower() for suit in suits]
    return all(suit == normalized[0] for suit in normalized)


def detect_straight(ranks: List[int]) -> SequenceInfo:
    """Detect a five-card straight.

    Two independent checks:
    1. Ace-high: map the Ace to 14, sort, dedupe; five consecutive values
       form a straight. Fewer than five unique values means a repeated rank.
    2. Wheel: the unmapped ranks sorted must equal exactly 1-2-3-4-5.
       With the Ace mapped to 14 the wheel reads 2-3-4-5-14, which the first
       check rejects, so it has to be recognized on its own.

    The wheel's high card is 5, not 14; this keeps it from being read as a
    royal flush.

    Raises:
        InvalidHandSize: If there are not exactly 5 ranks
    """
    _check_size(ranks)
    ranks_ace_high = sorted(ace_high(r) for r in ranks)
    unique_ace_high = sorted(set(ranks_ace_high))
    ace_high_run = len(unique_ace_high) == HAND_SIZE and are_consecutive(unique_ace_high)

    is_wheel = sorted(int(r) for r in ranks) == WHEEL_RANKS

    high = WHEEL_HIGH if is_wheel else ranks_ace_high[-1]
    return SequenceInfo(
        is_straight=ace_high_run or is_wheel,
        is_wheel=is_wheel,
        high=high,
        low=ranks_ace_high[0],
    )


def resolve_category(profile: RankProfile, sequence: SequenceInfo, flush: bool) -> HandCategory:
    """Pick the category from the analyses. First match wins."""
    if sequence.is_straight and flush:
        if sequence.high == ACE_HIGH and sequence.low == ROYAL_LOW:
            return HandCategory.ROYAL_FLUSH
        return HandCategory.STRAIGHT_FLUSH
    if profile.has_four:
        return HandCategory.FOUR_OF_A_KIND
    if profile.has_three and profile.num_pairs == 1:
        return HandCategory.FULL_HOUSE
    if flush:
        return HandCategory.FLUSH
    if sequence.is_straight:
        return HandCategory.STRAIGHT
    if profile.has_three:
        return HandCategory.THREE_OF_A_KIND
    if profile.num_pairs == 2:
        return HandCategory.TWO_PAIR
    if profile.num_pairs == 1:
        return HandCategory.PAIR
    return HandCategory.HIGH_CARD


# ============================================================================
# Entry points
# ============================================================================


def validate_hand(hand: Iterable[Card]) -> List[Card]:
    """Check a hand and return it with normalized ranks and suits.

    Checks run in order: hand size, then each card's rank and suit, then
    duplicate cards.

    Args:
        hand: Five Card objects

    Returns:
        New list of Cards with Rank ranks and Suit suits

    Raises:
        InvalidHandSize: If the hand does not hold exactly 5 cards
        InvalidRank: If a rank is not an integer in 1-13
        InvalidSuit: If a suit is not one of the four suits
        DuplicateCard: If a card appears twice
    """
    cards = list(hand)
    if len(cards) != HAND_SIZE:
        raise InvalidHandSize(f"Expected {HAND_SIZE} cards, got {len(cards)}")

    normalized = []
    for position, card in enumerate(cards):
        rank = card.rank
        if isinstance(rank, bool) or not isinstance(rank, Integral):
            raise InvalidRank(f"Card {position}: rank must be an integer, got {rank!r}")
        if not MIN_RANK <= rank <= MAX_RANK:
            raise InvalidRank(
                f"Card {position}: rank {rank} out of range [{MIN_RANK}, {MAX_RANK}]"
            )
        try:
            suit = Suit.parse(card.suit)
        except InvalidSuit as exc:
            raise InvalidSuit(f"Card {position}: {exc}") from None
        normalized.append(Card(rank=Rank(int(rank)), suit=suit))

    seen = set()
    for card in normalized:
        if card in seen:
            raise DuplicateCard(f"Duplicate card in hand: {card}")
        seen.add(card)

    return normalized


def classify_hand(hand: Iterable[Card]) -> HandCategory:
    """Classify five cards into one of the ten hand categories.

    Raises:
        HandValidationError: If the hand is malformed (see validate_hand)
    """
    cards = validate_hand(hand)
    ranks = [int(card.rank) for card in cards]
    suits = [card.suit for card in cards]

    return resolve_category(get_rank_profile(ranks), detect_straight(ranks), is_flush(suits))


def evaluate_poker_hand(hand: Iterable[Card]) -> str:
    """Classify five cards and return the category label, e.g. "straight"."""
    return classify_hand(hand).label


def get_categories() -> List[HandCategory]:
    """Get all categories, weakest first."""
    return list(HandCategory)


def describe_categories() -> Dict[HandCategory, str]:
    """Get a description of each category."""
    return {
        HandCategory.HIGH_CARD: "Five cards which do not form any of the combinations below",
        HandCategory.PAIR: (
            "Two cards of equal rank and three cards which are different "
            "from these and from each other"
        ),
        HandCategory.TWO_PAIR: "Two pairs of different ranks",
        HandCategory.THREE_OF_A_KIND: "Three cards of the same rank plus two unequal cards",
        HandCategory.STRAIGHT: "Five cards of mixed suits in sequence",
        HandCategory.FLUSH: "Five cards of the same suit",
        HandCategory.FULL_HOUSE: "Three cards of one rank and two cards of another rank",
        HandCategory.FOUR_OF_A_KIND: "Four cards of the same rank and any fifth card",
        HandCategory.STRAIGHT_FLUSH: "Five cards of the same suit in sequence",
        HandCategory.ROYAL_FLUSH: "Ten, Jack, Queen, King and Ace of the same suit",
    }


# Helper functions for creating hands for testing


def make_cards_from_ranks(
    ranks: List[int], suits: Optional[List[Union[Suit, str]]] = None
) -> List[Card]:
    """Create cards from a list of ranks and optional suits.

    If suits not provided, cycles through suits for variety. Note that five
    cycled suits are never all equal, so the result is never a flush.

    Args:
        ranks: List of rank values
        suits: Optional list of suits (must match length of ranks if provided)

    Returns:
        List of Card objects
    """
    if suits is None:
        all_suits = list(Suit)
        suits = [all_suits[i % len(all_suits)] for i in range(len(ranks))]

    if len(ranks) != len(suits):
        raise ValueError("ranks and suits must have same length")

    return [Card(rank=r, suit=s) for r, s in zip(ranks, suits)]
