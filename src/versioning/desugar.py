"""Cargo requirement -> npm-style range translation ("desugaring").

Cargo requirements are rewritten into node-semver range syntax by an ordered
table of full-string patterns. The first rule whose pattern matches the whole
(comma-normalized) requirement produces the output; a requirement no rule
recognizes is passed through unchanged.

The table reflects requirement shapes observed in the crates.io index rather
than a complete grammar, so order matters and entries are only ever appended.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled
from errors import VersionGrammarError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DesugarRule:
    """One entry of the rewrite table."""
    name: str
    pattern: Pattern[str]
    transform: Callable[[re.Match], str]

    def apply(self, expr: str) -> Optional[str]:
        """Return the rewritten range, or None when the pattern does not match."""
        m = self.pattern.fullmatch(expr)
        if m is None:
            return None
        return self.transform(m)


def _wildcard_range(m: re.Match) -> str:
    """Validate an x-range with semantic_version and render it canonically.

    ``1.2.*`` -> ``>=1.2.0 <1.3.0-0``; ``1.*`` and ``1.*.*`` -> ``>=1.0.0 <2.0.0-0``.
    """
    expr = m.group(0)
    try:
        semantic_version.NpmSpec(expr)
    except ValueError as e:
        raise VersionGrammarError(expr, str(e)) from e

    numeric = m.group("numeric")
    if not numeric.endswith("."):
        raise VersionGrammarError(expr, "wildcard must follow a dot")
    parts = numeric[:-1].split(".")
    if not all(p.isdigit() for p in parts):
        raise VersionGrammarError(expr, "empty version component")

    if len(parts) == 1:
        major = int(parts[0])
        return f">={major}.0.0 <{major + 1}.0.0-0"
    if len(parts) == 2 and m.group("trailing") is None:
        major, minor = int(parts[0]), int(parts[1])
        return f">={major}.{minor}.0 <{major}.{minor + 1}.0-0"
    raise VersionGrammarError(expr, "too many version components before wildcard")


_V = r"([0-9.]+)"

DESUGAR_RULES: Tuple[DesugarRule, ...] = (
    DesugarRule(
        "wildcard",
        re.compile(r"(?P<numeric>[0-9.]+)[*xX](?P<trailing>\.[*xX])?"),
        _wildcard_range,
    ),
    DesugarRule("exact", re.compile(r"= *([0-9a-zA-Z.-]+)"), lambda m: m.group(1)),
    DesugarRule("greater", re.compile(r"> *" + _V), lambda m: f"^{m.group(1)}"),
    DesugarRule(
        "caret_floor",
        re.compile(r"\^" + _V + r",? *>= *" + _V),
        lambda m: f"^{m.group(2)}",
    ),
    DesugarRule(
        "caret_below",
        re.compile(r"\^" + _V + r",? *< *" + _V),
        lambda m: f">= {m.group(1)} < {m.group(2)}",
    ),
    # Collapses to the floor; downstream fixtures depend on this exact output.
    DesugarRule(
        "caret_at_most",
        re.compile(r"\^" + _V + r",? *<= *" + _V),
        lambda m: m.group(1),
    ),
    DesugarRule(
        "bounded",
        re.compile(r">= *" + _V + r",? *<= *" + _V),
        lambda m: f">= {m.group(1)} < {m.group(2)}",
    ),
    DesugarRule(
        "double_caret",
        re.compile(r"\^ *" + _V + r",? *\^ *" + _V),
        lambda m: f"^{m.group(1)}",
    ),
    DesugarRule(
        "open_interval",
        re.compile(r"> *" + _V + r",? *< *" + _V),
        lambda m: f">= {m.group(1)} < {m.group(2)}",
    ),
    DesugarRule(
        "floor_wildcard",
        re.compile(r">= *" + _V + r",? *([0-9.]+\.[*xX])"),
        lambda m: f"^{m.group(1)}",
    ),
)


def normalize_commas(expr: str) -> str:
    """Replace the first comma with a space, as clause lists are joined in the index."""
    return expr.replace(",", " ", 1)


def match_rule(expr: str) -> Optional[DesugarRule]:
    """Return the first rule whose pattern matches the normalized ``expr``."""
    normalized = normalize_commas(expr)
    for rule in DESUGAR_RULES:
        if rule.pattern.fullmatch(normalized):
            return rule
    return None


def desugar(expr: str) -> str:
    """Translate a Cargo version requirement into an npm-style range.

    Args:
        expr: Requirement string as found in an index ``deps[].req`` field.

    Returns:
        The translated range, or the comma-normalized input when no rule applies.

    Raises:
        VersionGrammarError: A wildcard requirement is not a valid range.
    """
    normalized = normalize_commas(expr)
    for rule in DESUGAR_RULES:
        result = rule.apply(normalized)
        if result is not None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Desugared %r -> %r",
                    expr,
                    result,
                    extra=extra_context(component="desugar", rule=rule.name, outcome="matched"),
                )
            return result
    if is_debug_enabled(logger):
        logger.debug(
            "No desugar rule for %r; passing through",
            expr,
            extra=extra_context(component="desugar", outcome="passthrough"),
        )
    return normalized
