#!/usr/bin/env python3
"""Category census for five-card hands.

Classifies every 5-card hand in a 52-card deck (C(52,5) = 2,598,960) or
a random sample of hands, and prints how often each category occurs.
The exhaustive census is checked against the known combinatorial counts.

Usage:
    python -m poker_hands.scripts.census
    python -m poker_hands.scripts.census --samples 100000 --seed 42
    python -m poker_hands.scripts.census --device cuda --chunk-size 500000
"""

import argparse
import sys
import time
from dataclasses import dataclass
from itertools import combinations, islice
from typing import Dict, Iterable, Iterator, Optional

import numpy as np
import torch

from poker_hands.batch import NUM_CATEGORIES, GPUHandClassifier
from poker_hands.rules.hands import HAND_SIZE, HandCategory
from poker_hands.rules.ranks import DECK_SIZE

TOTAL_HANDS = 2_598_960

# Number of 5-card hands in each category
EXPECTED_COUNTS = {
    HandCategory.HIGH_CARD: 1_302_540,
    HandCategory.PAIR: 1_098_240,
    HandCategory.TWO_PAIR: 123_552,
    HandCategory.THREE_OF_A_KIND: 54_912,
    HandCategory.STRAIGHT: 10_200,
    HandCategory.FLUSH: 5_108,
    HandCategory.FULL_HOUSE: 3_744,
    HandCategory.FOUR_OF_A_KIND: 624,
    HandCategory.STRAIGHT_FLUSH: 36,
    HandCategory.ROYAL_FLUSH: 4,
}


@dataclass
class CensusConfig:
    """Census configuration."""

    # 0 means every hand in the deck
    samples: int = 0
    seed: Optional[int] = None
    chunk_size: int = 250_000
    device: str = "cpu"


def iter_hand_chunks(chunk_size: int) -> Iterator[np.ndarray]:
    """Yield every 5-card hand as [chunk, 5] int64 arrays of card indices."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    hands = combinations(range(DECK_SIZE), HAND_SIZE)
    while True:
        chunk = list(islice(hands, chunk_size))
        if not chunk:
            return
        yield np.array(chunk, dtype=np.int64)


def sample_hands(num_hands: int, rng: np.random.Generator) -> np.ndarray:
    """Draw random hands, each dealt from a fresh 52-card deck.

    Returns:
        [num_hands, 5] int64 array of card indices, no repeats within a hand
    """
    keys = rng.random((num_hands, DECK_SIZE))
    return np.argsort(keys, axis=1)[:, :HAND_SIZE].astype(np.int64)


def run_census(
    classifier: GPUHandClassifier, chunks: Iterable[np.ndarray]
) -> Dict[HandCategory, int]:
    """Classify all chunks and count hands per category."""
    totals = torch.zeros(NUM_CATEGORIES, dtype=torch.long, device=classifier.device)
    for chunk in chunks:
        categories = classifier.classify_card_indices(chunk)
        totals += classifier.category_counts(categories)
    return {category: int(totals[int(category)].item()) for category in HandCategory}


def compare_to_expected(counts: Dict[HandCategory, int]) -> Dict[HandCategory, int]:
    """Return the categories whose counts differ from EXPECTED_COUNTS."""
    return {
        category: counts.get(category, 0)
        for category, expected in EXPECTED_COUNTS.items()
        if counts.get(category, 0) != expected
    }


def print_counts(counts: Dict[HandCategory, int], exhaustive: bool) -> None:
    total = sum(counts.values())
    print(f"\n{'category':<15} {'count':>10} {'share':>9}   {'expected':>9}")
    for category in reversed(list(HandCategory)):
        count = counts[category]
        share = count / total if total else 0.0
        expected = EXPECTED_COUNTS[category] / TOTAL_HANDS
        marker = ""
        if exhaustive and count != EXPECTED_COUNTS[category]:
            marker = "  <-- MISMATCH"
        print(f"{category.label:<15} {count:>10} {share:>9.5%}   {expected:>9.5%}{marker}")
    print(f"{'total':<15} {total:>10}")


def parse_args(argv=None) -> CensusConfig:
    parser = argparse.ArgumentParser(description="Count five-card hands per category")
    parser.add_argument(
        "--samples",
        type=int,
        default=0,
        help="Number of random hands (default: 0 for every hand in the deck)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for sampling (default: None for random)",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=250_000,
        help="Hands classified per batch (default: 250000)",
    )
    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        help="Torch device (default: cpu)",
    )
    args = parser.parse_args(argv)
    return CensusConfig(
        samples=args.samples,
        seed=args.seed,
        chunk_size=args.chunk_size,
        device=args.device,
    )


def main(argv=None):
    config = parse_args(argv)
    if config.samples < 0:
        print("FAILED: --samples must be >= 0")
        sys.exit(1)
    if config.chunk_size <= 0:
        print("FAILED: --chunk-size must be positive")
        sys.exit(1)

    classifier = GPUHandClassifier(torch.device(config.device))
    exhaustive = config.samples == 0

    if exhaustive:
        print(f"Classifying all {TOTAL_HANDS:,} hands on {classifier.device}...")
        chunks = iter_hand_chunks(config.chunk_size)
    else:
        print(f"Classifying {config.samples:,} random hands (seed={config.seed})...")
        rng = np.random.default_rng(config.seed)
        chunks = (
            sample_hands(min(config.chunk_size, config.samples - start), rng)
            for start in range(0, config.samples, config.chunk_size)
        )

    start_time = time.time()
    counts = run_census(classifier, chunks)
    elapsed = time.time() - start_time

    print_counts(counts, exhaustive)
    print(f"\nTime: {elapsed:.2f}s")

    if exhaustive:
        mismatches = compare_to_expected(counts)
        if mismatches:
            print(f"\nFAILED: {len(mismatches)} category count(s) differ from expected")
            sys.exit(1)
        print("\nPASSED: All category counts match")

    sys.exit(0)


if __name__ == "__main__":
    main()
