from typing import Optional

from .config_manager import ConfigManager, ConfigError, default_mappings
from .history_registry import HistoryRegistry
from .purge_scheduler import PurgeScheduler
from .timeline_display import TimelineDisplay

class Application:
    """Main application class."""

    def __init__(self, config_path: Optional[str] = None):
        self._config_path = config_path
        try:
            self._config_manager = ConfigManager(config_path)
        except ConfigError as e:
            print(f"[App] Critical configuration error: {e}")
            raise

        settings = self._config_manager.get_settings()
        purge_scheduler = PurgeScheduler(
            interval=float(settings['purge_interval']),
            retention=self._config_manager.get_retention(),
            display_seconds=float(settings['display_seconds']),
        )
        self._registry = HistoryRegistry(purge_scheduler=purge_scheduler)
        self._registry.reset_from_mappings(self._config_manager.get_button_mappings())
        self._display: Optional[TimelineDisplay] = None

    @property
    def registry(self) -> HistoryRegistry:
        return self._registry

    def switch_controller(self, controller_type: str) -> None:
        """Start over with the default button set of another controller type."""
        print(f"[App] Switching to {controller_type} button mappings")
        self._registry.reset_from_mappings(default_mappings(controller_type))

    def run(self) -> None:
        """Start the application and its components."""
        print("[App] Starting application")
        self._display = TimelineDisplay(self._registry, self._config_manager.get_settings())
        try:
            self._display.run() # BLOCKING CALL
        except KeyboardInterrupt:
            print("\n[App] Keyboard interrupt received")
        finally:
            self.stop()

        print("[App] Application stopped")

    def stop(self) -> None:
        print("[App] Stopping application")
        if self._display:
            self._display.stop_display()
