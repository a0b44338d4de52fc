from grafter.spec import Correspondence
from .matchers import GumTreeMatcher, dice_similarity

__all__ = ["Correspondence", "GumTreeMatcher", "dice_similarity"]
