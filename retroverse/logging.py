"""
RetroVerse Logging

Per-module loggers for the engine and the games, plus structured records
for session summaries.

Usage:
    from retroverse.logging import get_logger

    log = get_logger('scheduler')
    log.debug("Tick %d", tick)
    log.info("Game started")

    # Structured records (one JSON object per game over)
    from retroverse.logging import emit_record
    emit_record('session', {'game': 'snake', 'score': 12})

Configuration:
    Environment variables:
        RETROVERSE_LOG_LEVEL=DEBUG          # Default level
        RETROVERSE_LOG_SCHEDULER=DEBUG      # Level for one module
        RETROVERSE_LOG_DIR=/tmp/retroverse  # Where FileSink writes
        RETROVERSE_LOGGING_SESSION_ENABLED=true  # Write session records

    Or programmatically:
        configure_logging(level='DEBUG', modules={'audio': 'INFO'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},           # RETROVERSE_LOGGING_<MODULE>_<KEY> settings
}


def _level_from_string(level_str: str) -> LogLevel:
    return _LEVEL_NAMES.get(level_str.upper(), LogLevel.INFO)


# =============================================================================
# Directories
# =============================================================================

def get_user_data_dir() -> Path:
    """Platform-specific directory for RetroVerse user data.

    - macOS: ~/Library/Application Support/RetroVerse
    - Windows: %APPDATA%/RetroVerse
    - Linux: $XDG_DATA_HOME/retroverse (~/.local/share/retroverse)
    """
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'RetroVerse'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'RetroVerse'
    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(xdg_data) / 'retroverse'


def get_log_dir() -> str:
    """Configured log dir, else RETROVERSE_LOG_DIR, else <user data>/logs."""
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())
    env_dir = os.environ.get('RETROVERSE_LOG_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())
    return str(get_user_data_dir() / 'logs')


# =============================================================================
# Structured records
# =============================================================================

class LogSink(ABC):
    """Destination for structured (JSON-serializable) records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class FileSink(LogSink):
    """
    Appends records to one JSONL file per module.

    Files are named ``<session>_<module>.jsonl`` and opened on first use.
    The first line of each file is a header record and closing the sink
    writes a footer.

    Args:
        log_dir: Directory for log files (default: get_log_dir())
        session_name: Prefix for file names (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def _dir(self) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _path(self, module: str) -> Path:
        return self._dir() / f"{self._session_name}_{module}.jsonl"

    def _write(self, module: str, record: Dict[str, Any]) -> None:
        f = self._files.get(module)
        if f is None:
            f = open(self._path(module), 'a', encoding='utf-8')
            self._files[module] = f
            f.write(json.dumps({
                'type': 'header',
                'module': module,
                'session_name': self._session_name,
                'start_time': time.time(),
            }) + "\n")
        f.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(module, {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for module, f in self._files.items():
            f.write(json.dumps({'type': 'footer', 'module': module, 'end_time': time.time()}) + "\n")
            f.close()
        self._files.clear()


class NullSink(LogSink):
    """Drops every record."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a structured record to the module's sink.

    Returns:
        True if a sink received the record
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def get_module_config(module: str) -> Dict[str, Any]:
    """Settings from RETROVERSE_LOGGING_<MODULE>_<KEY> variables, e.g. {'enabled': True}."""
    return _config['modules'].get(module.lower(), {})


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if RETROVERSE_LOGGING_<MODULE>_ENABLED is set, else NullSink."""
    if not get_module_config(module).get('enabled', False):
        return NullSink()
    return FileSink(session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level overrides
        log_dir: Directory for FileSink output
    """
    _config['default_level'] = _level_from_string(level)
    for mod, mod_level in (modules or {}).items():
        _config['module_levels'][mod] = _level_from_string(mod_level)
    if log_dir:
        _config['log_dir'] = log_dir


def _parse_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    return value


def _load_env_config() -> None:
    """Read RETROVERSE_LOG_* levels and RETROVERSE_LOGGING_* module settings."""
    reserved = ('RETROVERSE_LOG_LEVEL', 'RETROVERSE_LOG_DIR')
    for key, value in os.environ.items():
        if key == 'RETROVERSE_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'RETROVERSE_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('RETROVERSE_LOG_') and key not in reserved:
            _config['module_levels'][key[len('RETROVERSE_LOG_'):].lower()] = _level_from_string(value)
        elif key.startswith('RETROVERSE_LOGGING_'):
            module, _, setting = key[len('RETROVERSE_LOGGING_'):].lower().partition('_')
            if setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


_load_env_config()


# =============================================================================
# Loggers
# =============================================================================

class ArcadeLogger:
    """Logger for one module. Messages go to stderr as ``[module] LEVEL: msg``."""

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._module_key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}", file=sys.stderr)

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR level followed by the current traceback."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)
        tb = traceback.format_exc()
        if tb and tb.strip() != 'NoneType: None':
            for line in tb.strip().split('\n'):
                self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> ArcadeLogger:
    """
    Get the cached logger for a module.

    Args:
        module: Module name (e.g., 'scheduler', 'snake', 'audio')
    """
    return ArcadeLogger(module)
