"""
Game Registry - Auto-discovery and management of arcade games.

Games are automatically discovered by scanning the games/ directory for
subdirectories containing a game_mode.py with a class inheriting from BaseGame.

Game metadata and CLI arguments are retrieved from the game class itself
(via BaseGame class attributes).

Usage:
    from games.registry import get_registry

    registry = get_registry()
    available = registry.list_games()  # ['pong', 'snake', ...]

    # Get game info including CLI arguments
    info = registry.get_game_info('tetris')
    args = registry.get_game_arguments('tetris')

    # Create game instance
    game = registry.create_game('snake', seed=42)
"""

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

from retroverse.games.base_game import BaseGame
from retroverse.games.input.input_manager import InputManager
from retroverse.games.input.sources.keyboard import KeyboardInputSource
from retroverse.games.input.sources.touch import TouchInputSource
from retroverse.logging import get_logger

log = get_logger('registry')

GAMES_DIR = Path(__file__).parent


@dataclass
class GameInfo:
    """Information about a registered game."""
    name: str
    slug: str  # lowercase identifier (directory name)
    game_id: str  # high score key
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.Snake'

    # CLI arguments (from game class)
    arguments: List[Dict[str, Any]] = field(default_factory=list)


class GameRegistry:
    """
    Registry for auto-discovering and managing arcade games.

    Discovery works by:
    1. Looking for game_mode.py in each game directory
    2. Finding the class that inherits from BaseGame
    3. Reading metadata from class attributes (NAME, DESCRIPTION, etc.)

    A game whose module fails to import is logged and skipped; the rest
    of the arcade still loads.

    Args:
        games_dir: Directory to scan (default: this package)
        package: Import package matching games_dir
    """

    def __init__(self, games_dir: Optional[Path] = None, package: str = 'games'):
        self._games_dir = Path(games_dir) if games_dir is not None else GAMES_DIR
        self._package = package
        self._games: Dict[str, GameInfo] = {}
        self._game_classes: Dict[str, Type[BaseGame]] = {}
        self._discover_games()

    def _discover_games(self) -> None:
        if not self._games_dir.exists():
            log.warning(f"Games directory not found: {self._games_dir}")
            return
        for game_dir in sorted(self._games_dir.iterdir()):
            if not game_dir.is_dir():
                continue
            if game_dir.name.startswith('_') or game_dir.name.startswith('.'):
                continue
            if (game_dir / 'game_mode.py').exists():
                self._register_game(game_dir)

    def _register_game(self, game_dir: Path) -> None:
        """Register a game from its directory."""
        slug = game_dir.name.lower()
        module_path = f"{self._package}.{game_dir.name}"

        try:
            game_class = self._find_game_class(module_path)
        except Exception:
            log.exception(f"Failed to load game from {game_dir}")
            return
        if game_class is None:
            log.debug(f"No BaseGame subclass in {module_path}.game_mode")
            return

        self._game_classes[slug] = game_class
        self._games[slug] = GameInfo(slug=slug, module_path=module_path, **game_class.get_info())
        log.debug(f"Registered {slug} ({game_class.__name__})")

    def _find_game_class(self, module_path: str) -> Optional[Type[BaseGame]]:
        """Find the BaseGame subclass defined in ``<module_path>.game_mode``."""
        module = importlib.import_module(f"{module_path}.game_mode")
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Skip imported classes (only want classes defined in this module)
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseGame) and obj is not BaseGame and not inspect.isabstract(obj):
                return obj
        return None

    def list_games(self) -> List[str]:
        """Sorted list of available game slugs."""
        return sorted(self._games.keys())

    def get_game_info(self, slug: str) -> Optional[GameInfo]:
        return self._games.get(slug.lower())

    def get_game_arguments(self, slug: str) -> List[Dict[str, Any]]:
        """
        Get CLI arguments for a specific game.

        Args:
            slug: Game identifier

        Returns:
            List of argument definitions for argparse (empty if unknown)
        """
        info = self._games.get(slug.lower())
        if info is None:
            return []
        return info.arguments

    def create_game(self, slug: str, **kwargs) -> BaseGame:
        """
        Create a game mode instance.

        Args:
            slug: Game identifier
            **kwargs: Game-specific arguments plus seed/store/audio

        Returns:
            Game mode instance

        Raises:
            ValueError: If game not found
        """
        game_class = self._game_classes.get(slug.lower())
        if game_class is None:
            available = ', '.join(self.list_games())
            raise ValueError(f"Unknown game: {slug}. Available: {available}")
        return game_class(**kwargs)

    def create_input_manager(self, game: BaseGame,
                             surface_size: Optional[Tuple[int, int]] = None) -> InputManager:
        """
        Create an InputManager with keyboard and touch sources for a game.

        Taps are mapped through the game's current lifecycle state.

        Args:
            game: Game the input is for
            surface_size: Pixel size used to scale finger coordinates
                (default: the game's screen size)
        """
        manager = InputManager(KeyboardInputSource())
        manager.add_source(TouchInputSource(
            surface_size=surface_size or game.screen_size,
            state_provider=lambda: game.state,
        ))
        return manager


# Singleton instance for convenience
_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Get the global game registry instance."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
