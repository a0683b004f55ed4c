"""
uvsim - Universus Card Game Simulator

A rules engine for playing the Universus trading-card game digitally.
The engine provides:
- Card, zone and player model
- Turn/phase state machine (Review, Ready, Combat, End)
- Check resolution with foundation commitment
- In-memory game sessions and an HTTP API for a presentation layer
"""

__version__ = "0.1.0"
