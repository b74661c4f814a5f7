"""Fold per-file partial registries into one registry."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, List

from registry.cargo.index_parser import parse_index_file
from versioning.models import MergeStrategy, Registry

logger = logging.getLogger(__name__)


def _merge_step(strategy: MergeStrategy):
    # merged is owned by the fold and updated in place; partials are only read.
    def step(merged: Registry, partial: Registry) -> Registry:
        for name, record in partial.items():
            previous = merged.get(name)
            if previous is None:
                merged[name] = dict(record)
            elif strategy == MergeStrategy.UNION:
                merged[name] = {**previous, **record}
            else:
                dropped = sorted(set(previous) - set(record))
                if dropped:
                    logger.warning(
                        "Package %s appears in more than one index file; replacing %d earlier version(s)",
                        name,
                        len(dropped),
                    )
                merged[name] = dict(record)
        return merged
    return step


def merge_registries(
    partials: Iterable[Registry], strategy: MergeStrategy = MergeStrategy.REPLACE
) -> Registry:
    """Merge partial registries left to right.

    Args:
        partials: Partial registries in fold order.
        strategy: ``REPLACE`` keeps only the later record for a repeated
            package name; ``UNION`` merges version maps, later versions winning.

    Returns:
        A new registry; the partials are left untouched.
    """
    merged: Registry = {}
    return reduce(_merge_step(strategy), partials, merged)


def build_registry(
    paths: Iterable[str], strategy: MergeStrategy = MergeStrategy.REPLACE
) -> Registry:
    """Parse every index file in ``paths`` and merge the results."""
    path_list: List[str] = list(paths)
    logger.info("Parsing %d index file(s) with %s merge", len(path_list), strategy.value)
    return merge_registries((parse_index_file(p) for p in path_list), strategy)
