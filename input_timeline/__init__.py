"""
Input Timeline Package
----------------------
Button press history and scrolling timeline geometry for controller input.
"""

from .button_history import EventHistory, Transition
from .config_manager import ButtonMapping, ConfigError, ConfigManager, default_mappings
from .history_registry import HistoryRegistry
from .purge_scheduler import PurgeScheduler
from .stats_reader import ButtonStats, StatsReader
from .timeline_builder import Segment, TimelineBuilder, build

__all__ = [
    'EventHistory',
    'Transition',
    'ButtonMapping',
    'ConfigError',
    'ConfigManager',
    'default_mappings',
    'HistoryRegistry',
    'PurgeScheduler',
    'ButtonStats',
    'StatsReader',
    'Segment',
    'TimelineBuilder',
    'build',
]
