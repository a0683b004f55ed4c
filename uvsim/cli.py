"""
uvsim CLI - Command-line interface for the engine.

Usage:
    uvsim demo [--seed N] [--turns N]     Auto-play a demo game
    uvsim cards [--data-dir DIR]          Load and summarize scraped cards
    uvsim serve [--host H] [--port P]     Run the HTTP API
"""

import argparse
import logging
import sys

logger = logging.getLogger("uvsim")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="uvsim - Universus Card Game Simulator",
        prog="uvsim",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Auto-play a demo game")
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    demo_parser.add_argument("--turns", type=int, default=6, help="Turns to play")
    demo_parser.add_argument("--starting-player", type=int, choices=[1, 2], default=1)

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="Load and summarize scraped cards")
    cards_parser.add_argument("--data-dir", help="Directory holding all-cards.json")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "cards":
        cmd_cards(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def play_scripted_turn(engine):
    """
    Play one turn with a fixed script.

    Review and Ready are processed, one foundation is played if the hand
    has one, the first attack in hand is declared, and the turn ends.
    """
    from .engine_core import CardType, GamePhase, GameStatus

    player = engine.get_active_player()
    engine.process_turn()  # Review -> Ready
    engine.process_turn()  # Ready cards

    foundations = [c for c in player.hand if c.card_type == CardType.FOUNDATION]
    if foundations:
        engine.play_foundation(player.id, foundations[0])

    engine.advance_phase()  # Combat
    attacks = [c for c in player.hand if c.card_type == CardType.ATTACK]
    if attacks and engine.get_game_state().current_phase == GamePhase.COMBAT:
        engine.declare_attack(player.id, attacks[0])

    engine.end_turn()
    if engine.get_status() == GameStatus.IN_PROGRESS:
        engine.process_turn()  # End -> next turn


def cmd_demo(args):
    """Auto-play a demo game and print each turn."""
    from .cards import create_demo_game
    from .engine_core import GameStatus

    engine = create_demo_game(starting_player=args.starting_player, random_seed=args.seed)
    engine.start_game()

    for _ in range(args.turns):
        if engine.get_status() != GameStatus.IN_PROGRESS:
            break
        state = engine.get_game_state()
        player = engine.get_active_player()
        play_scripted_turn(engine)
        print(
            f"Turn {state.turn_number}: {player.name} "
            f"(hand {player.hand.count()}, deck {player.deck.count()}, "
            f"foundations {len(player.play_area.get_foundations())}, "
            f"discard {player.discard.count()})"
        )

    winner = engine.get_winner()
    print(f"Status: {engine.get_status().value}")
    if winner:
        print(f"Winner: {winner.name}")


def cmd_cards(args):
    """Load scraped card records and print counts per type."""
    from .cards import CardLoader

    loader = CardLoader(args.data_dir)
    try:
        cards = loader.load_and_convert_all()
    except FileNotFoundError:
        print(f"Error: No card data in {loader.data_dir}")
        sys.exit(1)

    for card_type, items in cards.items():
        print(f"{card_type.value:>10}: {len(items)}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
