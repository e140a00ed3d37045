"""Main application class for KubeDeck TUI."""

from __future__ import annotations

import inspect
import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from kubedeck.constants import APP_TITLE, NAMESPACE_DEFAULT, THEME_DEFAULT
from kubedeck.constants.enums import ThemeMode
from kubedeck.controllers.cluster.client import ClusterClient
from kubedeck.controllers.cluster.kubectl_client import KubectlClient
from kubedeck.keyboard.app import APP_BINDINGS
from kubedeck.models.state.app_settings import (
    AppSettings,
    ConfigLoadError,
    ConfigSaveError,
)
from kubedeck.models.state.config_manager import ConfigManager
from kubedeck.screens import DashboardScreen, NamespacePromptScreen

logger = logging.getLogger(__name__)

_THEME_ALIASES: dict[str, str] = {
    ThemeMode.DARK.value: "textual-dark",
    ThemeMode.LIGHT.value: "textual-light",
}

_HELP_TEXT = (
    "Keybindings:\n"
    "Pods:\n"
    "  Enter: Select pod (again: next container)\n"
    "  s: Remote shell into the highlighted pod\n"
    "Panels:\n"
    "  1 / 2 / 3: Memory / CPU / Net graph\n"
    "  l: Logs tab\n"
    "  Ctrl+D: Close the focused shell\n"
    "Actions:\n"
    "  n: Switch namespace\n"
    "  r: Refresh\n"
    "  ?: Help\n"
    "  q: Quit"
)


class KubeDeckApp(App[None]):
    """Main TUI application for KubeDeck."""

    TITLE = APP_TITLE
    CSS_PATH = "css/app.tcss"
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(
        self,
        namespace: str | None = None,
        context: str | None = None,
        config_path: Path | None = None,
        client: ClusterClient | None = None,
        settings: AppSettings | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.config_path = config_path
        if settings is not None:
            self.settings = settings
        else:
            self._load_settings()
        self._apply_theme()

        self.context = context or self.settings.context or None
        self.namespace = namespace or self.settings.namespace or NAMESPACE_DEFAULT
        self.client: ClusterClient = client or KubectlClient(
            context=self.context,
            kubectl_binary=self.settings.kubectl_binary,
        )

    def _load_settings(self) -> None:
        """Load application settings from persistent storage."""
        try:
            self.settings = ConfigManager.load(self.config_path)
        except ConfigLoadError as e:
            logger.warning("Using default settings: %s", e)
            self.settings = AppSettings()

    def _apply_theme(self) -> None:
        """Apply the stored theme, falling back to the default theme."""
        theme_name = str(self.settings.theme or "").strip()
        resolved_theme = _THEME_ALIASES.get(theme_name.lower(), theme_name)
        if resolved_theme not in self.available_themes:
            resolved_theme = THEME_DEFAULT

        self.settings.theme = resolved_theme
        self.theme = resolved_theme

    def on_mount(self) -> None:
        """Called when app is mounted."""
        logger.info("Starting %s in namespace %s", APP_TITLE, self.namespace)
        self.push_screen(DashboardScreen(self.namespace, self.client, self.settings))

    def action_show_help(self) -> None:
        """Show help dialog."""
        self.notify(_HELP_TEXT, severity="information", title="Help")

    async def action_refresh(self) -> None:
        """Refresh the current screen."""
        refresh_method = getattr(self.screen, "action_refresh", None)
        if refresh_method is None:
            return
        if inspect.iscoroutinefunction(refresh_method):
            await refresh_method()
        else:
            refresh_method()

    def action_prompt_namespace(self) -> None:
        """Ask for a namespace and switch the dashboard to it."""
        screen = self.screen
        if not isinstance(screen, DashboardScreen):
            return

        def _switch(namespace: str | None) -> None:
            if not namespace or namespace == screen.namespace:
                return
            self.namespace = namespace
            screen.switch_namespace(namespace)

        self.push_screen(NamespacePromptScreen(screen.namespace), _switch)

    def action_quit(self) -> None:  # type: ignore[override]
        """Quit the application."""
        self.exit()

    def on_unmount(self) -> None:
        """Save settings when app exits."""
        try:
            ConfigManager.save(self.settings, self.config_path)
        except ConfigSaveError as e:
            logger.warning("Failed to save settings: %s", e)


__all__ = [
    "KubeDeckApp",
]
