"""Name heuristics for resources, fields and operations.

The three singular/plural helpers are deliberately not inverses of each
other. Each one belongs to a single call site:

- ``strip_suffixes_and_singularize``: object names derived from paths.
- ``singularize_key``: JSON object keys during schema inference.
- ``pluralize``: operation ids that return many objects.
"""

import re

_WORD_BOUNDARY = re.compile(
    r"[^A-Za-z0-9]+"               # punctuation, spaces, underscores
    r"|(?<=[a-z])(?=[A-Z])"        # fooBar
    r"|(?<=[A-Z])(?=[A-Z][a-z])"   # HTTPServer
    r"|(?<=[A-Za-z])(?=[0-9])"     # v2
    r"|(?<=[0-9])(?=[A-Za-z])"     # 2fa
)


def split_words(name: str) -> list[str]:
    return [w for w in _WORD_BOUNDARY.split(name) if w]


def to_pascal_case(name: str) -> str:
    """Convert name to PascalCase, e.g. ``order_items`` -> ``OrderItems``."""
    return "".join(w[0].upper() + w[1:].lower() for w in split_words(name))


def to_snake_case(name: str) -> str:
    """Convert name to snake_case, e.g. ``GET`` -> ``get``."""
    return "_".join(w.lower() for w in split_words(name))


def is_plural(name: str) -> bool:
    return name.endswith("s") and not name.endswith("ss")


def strip_suffixes_and_singularize(name: str) -> str:
    """Singular object name for a path segment or operation name.

    e.g. ``Vendors`` -> ``Vendor``, ``VendorsResponse`` -> ``Vendor``
    """
    if name.endswith("Response"):
        name = name[: -len("Response")]
    if name.endswith("List"):
        name = name[: -len("List")]
    if name.endswith("list"):
        name = name[: -len("list")]
    if name.endswith("ies"):
        return name[:-3] + "y"
    if is_plural(name):
        return name[:-1]
    return name


def singularize_key(name: str) -> str:
    """Singular form of a JSON object key, e.g. ``addresses`` -> ``address``."""
    if name.endswith("sses"):
        return name[:-2]
    if name.endswith("ies"):
        return name[:-3] + "y"
    if is_plural(name):
        return name[:-1]
    return name


def pluralize(name: str) -> str:
    """Plural form of an operation id, e.g. ``getActivity`` -> ``getActivities``."""
    if name.endswith("ss"):
        return name + "es"
    if name.endswith("y"):
        return name[:-1] + "ies"
    if not name.endswith("s"):
        return name + "s"
    return name
