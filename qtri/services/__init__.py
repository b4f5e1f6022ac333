from .command_runner import CommandResult, CommandRunner
from .documentation_cache import DocumentationCache
from .tab_session import DocumentView, TabSession

__all__ = [
    "CommandResult",
    "CommandRunner",
    "DocumentView",
    "DocumentationCache",
    "TabSession",
]
