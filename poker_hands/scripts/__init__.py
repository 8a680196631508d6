"""Command-line tools for poker_hands."""
