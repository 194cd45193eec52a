"""Composition of inference rules into the solver's propagation passes."""

from __future__ import annotations

from typing import Tuple

from ..puzzle import Puzzle
from ..rules import (
    ColorColorRule,
    ColorOctagonRule,
    CrossingEdgesRule,
    DesiredEdgesRule,
    OctagonOneEdgeOfColorRule,
    Rule,
    TerminalTerminalRule,
)


class Chain:
    """Apply rules once each, in order; each sees the previous one's output."""

    def __init__(self, *rules: Rule) -> None:
        self.rules: Tuple[Rule, ...] = rules

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        for rule in self.rules:
            puzzle = rule(puzzle)
        return puzzle

    def __repr__(self) -> str:
        return f"Chain({', '.join(repr(r) for r in self.rules)})"


class Fixpoint:
    """Reapply a rule until its output equals its input."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        current = puzzle
        while True:
            nxt = self.rule(current)
            if nxt == current:
                return nxt
            current = nxt

    def __repr__(self) -> str:
        return f"Fixpoint({self.rule!r})"


# Conclusions of these rules only depend on node kinds, so one pass suffices.
ONE_TIME_INFERENCE = Chain(
    ColorColorRule(),
    ColorOctagonRule(),
    TerminalTerminalRule(),
)

# Later rules can re-enable earlier ones, hence the outer fixpoint.
MULTI_TIME_INFERENCE = Fixpoint(
    Chain(
        Fixpoint(DesiredEdgesRule()),
        Fixpoint(CrossingEdgesRule()),
        Fixpoint(OctagonOneEdgeOfColorRule()),
    )
)
