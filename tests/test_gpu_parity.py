"""Parity tests between the scalar classifier and the batched torch classifier.

The batched path must agree with classify_hand on every valid hand and
raise the same error types on malformed input.
"""

from itertools import combinations
from typing import List
import random

import numpy as np
import pytest
import torch

from poker_hands.batch import GPUHandClassifier, NUM_CATEGORIES, labels, validate_batch
from poker_hands.rules import (
    Card,
    Rank,
    Suit,
    HandCategory,
    DuplicateCard,
    InvalidHandSize,
    InvalidRank,
    InvalidSuit,
    card_to_idx,
    classify_hand,
    create_standard_deck,
    make_cards_from_ranks,
)


@pytest.fixture
def classifier() -> GPUHandClassifier:
    return GPUHandClassifier(torch.device("cpu"))


def _make_random_hand(rng: random.Random) -> List[Card]:
    return rng.sample(create_standard_deck(), 5)


def test_random_hands_match_scalar(classifier):
    rng = random.Random(123)
    hands = [_make_random_hand(rng) for _ in range(2000)]

    batched = classifier.classify_hands(hands)
    for hand, category in zip(hands, batched):
        assert category == classify_hand(hand), hand


def test_every_hand_from_edge_ranks_matches_scalar(classifier):
    # Ace, wheel and broadway ranks in two suits: C(18, 5) hands
    ranks = [Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE,
             Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING]
    deck = [Card(rank=r, suit=s) for r in ranks for s in (Suit.CLUB, Suit.HEART)]
    hands = [list(combo) for combo in combinations(deck, 5)]

    card_idx = torch.tensor([[card_to_idx(c) for c in hand] for hand in hands])
    batched = classifier.classify_card_indices(card_idx).tolist()
    scalar = [int(classify_hand(hand)) for hand in hands]

    assert batched == scalar
    assert int(HandCategory.ROYAL_FLUSH) in batched
    assert int(HandCategory.STRAIGHT_FLUSH) in batched


def test_known_hands(classifier):
    hands = [
        make_cards_from_ranks([10, 11, 12, 13, 1], ["spade"] * 5),
        make_cards_from_ranks([1, 2, 3, 4, 5], ["club"] * 5),
        make_cards_from_ranks([1, 2, 3, 4, 5], ["club", "diamond", "spade", "heart", "club"]),
        make_cards_from_ranks([7, 7, 7, 7, 2]),
        make_cards_from_ranks([13, 13, 13, 5, 5]),
        make_cards_from_ranks([2, 5, 9, 11, 13], ["club"] * 5),
        make_cards_from_ranks([4, 5, 6, 7, 8]),
        make_cards_from_ranks([6, 6, 6, 2, 9]),
        make_cards_from_ranks([4, 4, 9, 9, 2]),
        make_cards_from_ranks([1, 1, 2, 5, 9]),
        make_cards_from_ranks([2, 5, 9, 11, 13]),
    ]
    ranks, suits = classifier.encode_hands(hands)

    assert labels(classifier.classify_batched(ranks, suits)) == [
        "royalflush",
        "straightflush",
        "straight",
        "fourofakind",
        "fullhouse",
        "flush",
        "straight",
        "threeofakind",
        "twopair",
        "pair",
        "highcard",
    ]


def test_encode_hands_normalizes_suits(classifier):
    hands = [make_cards_from_ranks([1, 2, 3, 4, 5], ["Club", "SPADE", "diamond", "Heart", "club"])]
    ranks, suits = classifier.encode_hands(hands)
    assert ranks.tolist() == [[1, 2, 3, 4, 5]]
    assert suits.tolist() == [[0, 1, 2, 3, 0]]


def test_encode_hands_validates(classifier):
    with pytest.raises(DuplicateCard):
        classifier.encode_hands([make_cards_from_ranks([2, 2, 3, 4, 5], ["club"] * 5)])


def test_empty_batch(classifier):
    ranks, suits = classifier.encode_hands([])
    assert ranks.shape == (0, 5)
    assert classifier.classify_batched(ranks, suits).shape == (0,)
    assert classifier.classify_hands([]) == []


def test_cards_to_tensors(classifier):
    ranks, suits = classifier.cards_to_tensors(np.array([[0, 12, 13, 38, 51]]))
    assert ranks.tolist() == [[1, 13, 1, 13, 13]]
    assert suits.tolist() == [[0, 0, 1, 2, 3]]


def test_category_counts(classifier):
    categories = torch.tensor([0, 0, 1, 9])
    counts = classifier.category_counts(categories)
    assert counts.shape == (NUM_CATEGORIES,)
    assert counts.tolist() == [2, 1, 0, 0, 0, 0, 0, 0, 0, 1]


def test_int32_inputs(classifier):
    ranks = torch.tensor([[10, 11, 12, 13, 1]], dtype=torch.int32)
    suits = torch.zeros((1, 5), dtype=torch.int32)
    assert classifier.classify_batched(ranks, suits).tolist() == [int(HandCategory.ROYAL_FLUSH)]


class TestBatchValidation:
    """Test that the batched path raises the scalar error types."""

    def test_wrong_hand_size(self):
        ranks = torch.tensor([[2, 3, 4, 5]])
        with pytest.raises(InvalidHandSize):
            validate_batch(ranks, torch.zeros_like(ranks))

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            validate_batch(torch.ones((2, 5), dtype=torch.long), torch.ones((3, 5), dtype=torch.long))

    def test_rank_out_of_range(self):
        ranks = torch.tensor([[2, 3, 4, 5, 6], [0, 3, 4, 5, 6]])
        suits = torch.tensor([[0, 1, 2, 3, 0], [0, 1, 2, 3, 0]])
        with pytest.raises(InvalidRank, match="Hand 1"):
            validate_batch(ranks, suits)

    def test_float_ranks(self):
        ranks = torch.tensor([[2.0, 3.0, 4.0, 5.0, 6.0]])
        with pytest.raises(InvalidRank):
            validate_batch(ranks, torch.zeros((1, 5), dtype=torch.long))

    def test_suit_out_of_range(self):
        ranks = torch.tensor([[2, 3, 4, 5, 6]])
        suits = torch.tensor([[0, 1, 2, 3, 4]])
        with pytest.raises(InvalidSuit):
            validate_batch(ranks, suits)

    def test_duplicate_card(self):
        ranks = torch.tensor([[9, 9, 4, 5, 6]])
        suits = torch.tensor([[2, 2, 0, 0, 0]])
        with pytest.raises(DuplicateCard):
            validate_batch(ranks, suits)

    def test_card_index_out_of_range(self, classifier):
        with pytest.raises(ValueError):
            classifier.classify_card_indices(torch.tensor([[0, 1, 2, 3, 52]]))
