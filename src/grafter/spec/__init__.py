from .models import SEQUENCE_ROLES, TreeNode, NodeTriple, TreeOwnershipError, Attrs
from .correspondence import Correspondence
from .errors import (
    GrafterError,
    UnavailableTreeError,
    RenderError,
    PatchApplyError,
    VersionSourceError,
)
from .protocols import (
    MatcherProtocol,
    TreeParserProtocol,
    CodeGeneratorProtocol,
)

__all__ = [
    "TreeNode",
    "NodeTriple",
    "TreeOwnershipError",
    "Attrs",
    "SEQUENCE_ROLES",
    "Correspondence",
    # Errors
    "GrafterError",
    "UnavailableTreeError",
    "RenderError",
    "PatchApplyError",
    "VersionSourceError",
    # Collaborators
    "MatcherProtocol",
    "TreeParserProtocol",
    "CodeGeneratorProtocol",
]
