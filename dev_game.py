#!/usr/bin/env python3
"""
Arcade Game Launcher

Runs one game in a pygame window with keyboard and touch/mouse input.

Uses the game registry for auto-discovery. Game-specific arguments are
dynamically loaded from each game's ARGUMENTS list.

Usage:
    # List available games
    python dev_game.py --list

    # Play a game
    python dev_game.py snake
    python dev_game.py pong --difficulty hard
    python dev_game.py tetris --seed 7

    # See game-specific options
    python dev_game.py spaceinvaders --help

Settings (fps, audio, high score file, per-game defaults) come from
retroverse.yaml or the file named by RETROVERSE_CONFIG.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

import pygame

from games.registry import GameRegistry, get_registry
from retroverse.config import ArcadeSettings, load_settings
from retroverse.games.audio import PygameToneAudio
from retroverse.games.host import GameHost
from retroverse.games.input.sources.keyboard import enable_key_repeat
from retroverse.games.persistence import JsonHighScoreStore
from retroverse.games.render import PygameRenderSurface
from retroverse.logging import close_all_sinks, create_sink_for_module, get_logger, register_sink

log = get_logger('dev_game')

LAUNCHER_ARGS = {'game', 'list', 'config', 'mute', 'fps'}


def add_game_arguments(parser: argparse.ArgumentParser, arguments: List[Dict[str, Any]]) -> None:
    """Add a game's ARGUMENTS to an argparse parser."""
    added = set()
    for arg_def in arguments:
        arg_name = arg_def['name']
        # Avoid duplicates
        if arg_name in added:
            continue
        added.add(arg_name)

        kwargs = {}
        if 'type' in arg_def:
            type_val = arg_def['type']
            # Handle type as string or actual type
            if isinstance(type_val, str):
                kwargs['type'] = {'str': str, 'int': int, 'float': float}.get(type_val, str)
            else:
                kwargs['type'] = type_val
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']

        parser.add_argument(arg_name, **kwargs)


def build_parser(registry: GameRegistry, game: Optional[str]) -> argparse.ArgumentParser:
    available_games = registry.list_games()
    parser = argparse.ArgumentParser(
        description='RetroVerse arcade launcher',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available games: {', '.join(available_games)}

Examples:
  python dev_game.py --list              # List available games
  python dev_game.py snake               # Play Snake
  python dev_game.py pong --difficulty hard
  python dev_game.py <game> --help       # See game-specific options
        """
    )
    parser.add_argument('game', nargs='?', choices=available_games, help='Game to play')
    parser.add_argument('--list', '-l', action='store_true',
                        help='List all available games and exit')
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='Settings YAML file (default: retroverse.yaml)')
    parser.add_argument('--mute', action='store_true', help='Disable sound')
    parser.add_argument('--fps', type=int, default=None, help='Override render frame rate')

    if game:
        add_game_arguments(parser, registry.get_game_arguments(game))
    return parser


def collect_game_kwargs(args: argparse.Namespace, parser: argparse.ArgumentParser,
                        settings: ArcadeSettings, game_id: str) -> Dict[str, Any]:
    """Game kwargs: settings file values, overridden by explicit CLI flags.

    A CLI value equal to the parser default counts as not given, so the
    settings file can change a game's defaults.
    """
    kwargs = settings.game_options(game_id)
    for key, value in vars(args).items():
        if key in LAUNCHER_ARGS or value is None:
            continue
        if key in kwargs and value == parser.get_default(key):
            continue
        kwargs[key] = value
    return kwargs


def print_game_list(registry: GameRegistry) -> None:
    print("\nAvailable Games")
    print("=" * 50)
    for slug in registry.list_games():
        info = registry.get_game_info(slug)
        print(f"\n  {slug}")
        print(f"    Name: {info.name}")
        print(f"    Description: {info.description}")
        print(f"    Version: {info.version}")
        if info.arguments:
            print(f"    Options: {', '.join(a['name'] for a in info.arguments)}")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the arcade launcher."""
    registry = get_registry()

    # Phase 1: Parse just enough to identify the game
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('game', nargs='?', choices=registry.list_games())
    pre_args, _ = pre_parser.parse_known_args(argv)

    # Phase 2: Build full parser with game-specific arguments
    parser = build_parser(registry, pre_args.game)
    args = parser.parse_args(argv)

    if args.list:
        print_game_list(registry)
        return 0

    if args.game is None:
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config)
    except Exception as e:
        print(f"ERROR: Invalid settings: {e}")
        return 1
    settings.apply_logging()
    register_sink('session', create_sink_for_module('session'))

    info = registry.get_game_info(args.game)
    store = JsonHighScoreStore(settings.high_score_path)
    game_kwargs = collect_game_kwargs(args, parser, settings, info.game_id)

    pygame.init()
    audio = PygameToneAudio(enabled=settings.audio_enabled and not args.mute,
                            volume=settings.volume)
    try:
        game = registry.create_game(args.game, store=store, audio=audio, **game_kwargs)
    except Exception:
        log.exception(f"Failed to create {args.game}")
        pygame.quit()
        return 1

    screen = pygame.display.set_mode(game.screen_size)
    pygame.display.set_caption(info.name)
    enable_key_repeat()

    print("=" * 60)
    print(f"{info.name}")
    print("=" * 60)
    print(f"High scores: {store.path}")
    if game_kwargs:
        print("Game options:")
        for k, v in game_kwargs.items():
            print(f"  --{k.replace('_', '-')}: {v}")
    print()
    print("Controls:")
    print("  - Arrows / WASD to move")
    print("  - SPACE to start or act, C to hold (Tetris)")
    print("  - Swipe, drag or tap on touch screens")
    print("  - P to pause, R to reset after game over")
    print("  - ESC to quit")
    print("=" * 60)

    input_manager = registry.create_input_manager(game)
    host = GameHost(game, input_manager, PygameRenderSurface(screen))
    clock = pygame.time.Clock()
    fps = args.fps or settings.fps

    def poll_host() -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            input_manager.handle_event(event)
        return True

    try:
        host.run(poll_host, lambda: clock.tick(fps))
    except KeyboardInterrupt:
        log.info("Interrupted")
    finally:
        close_all_sinks()
        pygame.quit()

    print(f"Final Score: {game.get_score()}  (High Score: {game.high_score})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
