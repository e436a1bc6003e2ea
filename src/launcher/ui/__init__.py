"""Interactive launcher window using prompt_toolkit."""

from launcher.ui.results import ResultsList
from launcher.ui.window import LauncherWindow

__all__ = ["LauncherWindow", "ResultsList"]
