from .bus import SpyBus
from .workspace import WorkspaceFactory
from .trees import n, LabelMatcher
from .helpers import create_test_runner, git

__all__ = [
    "SpyBus",
    "WorkspaceFactory",
    "n",
    "LabelMatcher",
    "create_test_runner",
    "git",
]
