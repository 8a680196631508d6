"""Poker Hands - five-card poker hand classification.

Classifies a five-card hand into one of ten categories, from high card
to royal flush, with a scalar classifier and a batched torch classifier.
"""

__version__ = "0.1.0"
__author__ = "Poker Hands Team"

from poker_hands.rules import Card, HandCategory, classify_hand, evaluate_poker_hand

__all__ = ["__version__", "Card", "HandCategory", "classify_hand", "evaluate_poker_hand"]
