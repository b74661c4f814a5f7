"""Package name normalization for the test registry namespace."""

from constants import Constants


def normalize_name(name: str) -> str:
    """Map a crate name to its namespaced registry identifier.

    Only the first hyphen is rewritten: ``foo-bar-baz`` -> ``test/foo_bar-baz``.
    """
    return Constants.NAME_NAMESPACE + name.replace("-", "_", 1)
