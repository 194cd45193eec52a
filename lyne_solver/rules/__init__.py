from .base import Rule
from .color import ColorColorRule, ColorOctagonRule, TerminalTerminalRule
from .crossing import CrossingEdgesRule
from .degree import DesiredEdgesRule
from .octagon import OctagonOneEdgeOfColorRule

__all__ = [
    "ColorColorRule",
    "ColorOctagonRule",
    "CrossingEdgesRule",
    "DesiredEdgesRule",
    "OctagonOneEdgeOfColorRule",
    "Rule",
    "TerminalTerminalRule",
]
