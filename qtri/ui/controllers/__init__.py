"""Qt-aware controllers used by the browser window."""

from .action_registry import ActionRegistry
from .help_controller import HelpController
from .search_controller import SearchController
from .tabs_controller import TabsController

__all__ = [
    "ActionRegistry",
    "HelpController",
    "SearchController",
    "TabsController",
]
