"""
Cards - Card data sources for the engine.

This module contains:
- The loader for scraped card records
- Demo characters and practice decks
"""

from .loader import CardLoader, ScrapedCard, card_from_record, make_instances, parse_symbol
from .demo import (
    create_ryu,
    create_chun_li,
    build_foundation,
    build_demo_deck,
    create_demo_game,
)

__all__ = [
    "CardLoader",
    "ScrapedCard",
    "card_from_record",
    "make_instances",
    "parse_symbol",
    "create_ryu",
    "create_chun_li",
    "build_foundation",
    "build_demo_deck",
    "create_demo_game",
]
