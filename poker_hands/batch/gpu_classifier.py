"""GPU-accelerated batched hand classification.

This module provides:
- Tensor encoding of hands (rank tensor + suit tensor, shape [N, 5])
- Batched validation raising the same errors as the scalar classifier
- Batched classification using PyTorch

Key insight: every analysis in the scalar classifier is a fixed-size
reduction over five cards, so a whole batch can be classified with a
handful of tensor ops and no per-hand Python loop.

Tensor encoding:
- ranks: long, values 1-13 (Ace = 1)
- suits: long, values 0-3 (Suit ordinal: club, spade, diamond, heart)
- card indices: suit * 13 + (rank - 1), values 0-51
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import torch

from poker_hands.rules.errors import (
    DuplicateCard,
    HandValidationError,
    InvalidHandSize,
    InvalidRank,
    InvalidSuit,
)
from poker_hands.rules.hands import (
    CATEGORY_LABELS,
    HAND_SIZE,
    ROYAL_LOW,
    WHEEL_HIGH,
    WHEEL_RANKS,
    HandCategory,
    validate_hand,
)
from poker_hands.rules.ranks import ACE_HIGH, MAX_RANK, MIN_RANK, NUM_RANKS, NUM_SUITS, Card

NUM_CATEGORIES = len(HandCategory)


def _first_bad_row(bad: torch.Tensor) -> int:
    return int(torch.nonzero(bad.any(dim=1))[0, 0].item())


def validate_batch(ranks: torch.Tensor, suits: torch.Tensor) -> None:
    """Check a batch of hands.

    Raises:
        InvalidHandSize: If the tensors are not [N, 5]
        InvalidRank: If a rank is not an integer in 1-13
        InvalidSuit: If a suit is not in 0-3
        DuplicateCard: If a hand holds the same card twice
    """
    if ranks.shape != suits.shape:
        raise ValueError(f"ranks shape {tuple(ranks.shape)} != suits shape {tuple(suits.shape)}")
    if ranks.dim() != 2 or ranks.shape[1] != HAND_SIZE:
        raise InvalidHandSize(f"Expected [N, {HAND_SIZE}] tensors, got {tuple(ranks.shape)}")

    if ranks.is_floating_point() or ranks.dtype == torch.bool:
        raise InvalidRank(f"Ranks must be an integer tensor, got {ranks.dtype}")
    if suits.is_floating_point() or suits.dtype == torch.bool:
        raise InvalidSuit(f"Suits must be an integer tensor, got {suits.dtype}")

    bad_ranks = (ranks < MIN_RANK) | (ranks > MAX_RANK)
    if bad_ranks.any():
        row = _first_bad_row(bad_ranks)
        raise InvalidRank(
            f"Hand {row}: ranks {ranks[row].tolist()} out of range [{MIN_RANK}, {MAX_RANK}]"
        )

    bad_suits = (suits < 0) | (suits >= NUM_SUITS)
    if bad_suits.any():
        row = _first_bad_row(bad_suits)
        raise InvalidSuit(f"Hand {row}: suits {suits[row].tolist()} out of range [0, {NUM_SUITS})")

    card_idx = (suits.long() * NUM_RANKS + ranks.long() - MIN_RANK).sort(dim=1).values
    dupes = card_idx[:, 1:] == card_idx[:, :-1]
    if dupes.any():
        row = _first_bad_row(dupes)
        raise DuplicateCard(f"Hand {row}: duplicate card indices {card_idx[row].tolist()}")


@dataclass
class GPUHandClassifier:
    """Batched hand classification on a torch device.

    Keeps constant tensors on the device to avoid CPU-GPU transfer overhead.
    """

    device: torch.device

    wheel_ranks: torch.Tensor  # [5] - 1, 2, 3, 4, 5

    def __init__(self, device: torch.device):
        self.device = torch.device(device)
        self.wheel_ranks = torch.tensor(WHEEL_RANKS, dtype=torch.long, device=self.device)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_hands(self, hands: Iterable[Sequence[Card]]) -> Tuple[torch.Tensor, torch.Tensor]:
        """Validate Card hands and encode them as [N, 5] rank and suit tensors."""
        ranks: List[List[int]] = []
        suits: List[List[int]] = []
        for hand in hands:
            cards = validate_hand(hand)
            ranks.append([int(card.rank) for card in cards])
            suits.append([card.suit.ordinal for card in cards])

        if not ranks:
            empty = torch.zeros((0, HAND_SIZE), dtype=torch.long, device=self.device)
            return empty, empty.clone()

        return (
            torch.tensor(ranks, dtype=torch.long, device=self.device),
            torch.tensor(suits, dtype=torch.long, device=self.device),
        )

    def cards_to_tensors(self, card_idx) -> Tuple[torch.Tensor, torch.Tensor]:
        """Split [N, 5] card indices (0-51) into rank and suit tensors."""
        card_idx = torch.as_tensor(card_idx, dtype=torch.long, device=self.device)
        return card_idx % NUM_RANKS + MIN_RANK, card_idx // NUM_RANKS

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify_batched(
        self, ranks: torch.Tensor, suits: torch.Tensor, validate: bool = True
    ) -> torch.Tensor:
        """Classify a batch of hands.

        Args:
            ranks: [N, 5] rank values (1-13)
            suits: [N, 5] suit ordinals (0-3)
            validate: Run validate_batch first

        Returns:
            [N] long tensor of HandCategory values
        """
        if validate:
            validate_batch(ranks, suits)

        ranks = ranks.to(device=self.device, dtype=torch.long)
        suits = suits.to(device=self.device, dtype=torch.long)
        num_hands = ranks.shape[0]

        # Rank frequencies: [N, 14], column r counts rank r
        counts = torch.zeros((num_hands, MAX_RANK + 1), dtype=torch.long, device=self.device)
        counts.scatter_add_(1, ranks, torch.ones_like(ranks))
        max_count = counts.max(dim=1).values
        num_pairs = (counts == 2).sum(dim=1)
        has_three = max_count == 3
        has_four = max_count == 4

        flush = (suits == suits[:, :1]).all(dim=1)

        # Ace-high run: sorted differences all 1 (this also rules out repeats)
        ranks_ace_high = ranks.masked_fill(ranks == MIN_RANK, ACE_HIGH).sort(dim=1).values
        ace_high_run = (ranks_ace_high[:, 1:] - ranks_ace_high[:, :-1] == 1).all(dim=1)

        # Wheel: raw ranks sorted are exactly 1-2-3-4-5
        wheel = (ranks.sort(dim=1).values == self.wheel_ranks).all(dim=1)

        straight = ace_high_run | wheel
        straight_high = ranks_ace_high[:, -1].masked_fill(wheel, WHEEL_HIGH)
        straight_flush = straight & flush
        royal = straight_flush & (straight_high == ACE_HIGH) & (ranks_ace_high[:, 0] == ROYAL_LOW)

        # Assign weakest first so stronger categories overwrite
        categories = torch.full(
            (num_hands,), int(HandCategory.HIGH_CARD), dtype=torch.long, device=self.device
        )
        categories[num_pairs == 1] = int(HandCategory.PAIR)
        categories[num_pairs == 2] = int(HandCategory.TWO_PAIR)
        categories[has_three] = int(HandCategory.THREE_OF_A_KIND)
        categories[straight] = int(HandCategory.STRAIGHT)
        categories[flush] = int(HandCategory.FLUSH)
        categories[has_three & (num_pairs == 1)] = int(HandCategory.FULL_HOUSE)
        categories[has_four] = int(HandCategory.FOUR_OF_A_KIND)
        categories[straight_flush] = int(HandCategory.STRAIGHT_FLUSH)
        categories[royal] = int(HandCategory.ROYAL_FLUSH)

        return categories

    def classify_card_indices(self, card_idx, validate: bool = True) -> torch.Tensor:
        """Classify [N, 5] card indices (0-51)."""
        card_idx = torch.as_tensor(card_idx, dtype=torch.long, device=self.device)
        if validate and ((card_idx < 0) | (card_idx >= NUM_RANKS * NUM_SUITS)).any():
            raise HandValidationError(f"Card indices must be in [0, {NUM_RANKS * NUM_SUITS})")
        ranks, suits = self.cards_to_tensors(card_idx)
        return self.classify_batched(ranks, suits, validate=validate)

    def classify_hands(self, hands: Iterable[Sequence[Card]]) -> List[HandCategory]:
        """Classify Card hands in one batch."""
        ranks, suits = self.encode_hands(hands)
        codes = self.classify_batched(ranks, suits, validate=False)
        return [HandCategory(code) for code in codes.tolist()]

    @staticmethod
    def category_counts(categories: torch.Tensor) -> torch.Tensor:
        """[NUM_CATEGORIES] histogram of a category tensor."""
        return torch.bincount(categories.flatten(), minlength=NUM_CATEGORIES)


def labels(categories: torch.Tensor) -> List[str]:
    """Map a category tensor to label strings."""
    return [CATEGORY_LABELS[HandCategory(code)] for code in categories.flatten().tolist()]
