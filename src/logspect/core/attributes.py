"""Helpers for addressing nested log attributes by dotted path."""

from collections.abc import Mapping


class _Missing:
    """Marker for an attribute path that does not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def flatten_attributes(
    attributes: Mapping[str, object], prefix: str = ""
) -> dict[str, object]:
    """Flatten nested attribute mappings into dotted keys.

    Non-empty nested mappings are descended; any other value, including an
    empty mapping, is kept as a leaf. Keys keep their traversal order.

    Args:
        attributes: Attribute mapping, possibly nested.
        prefix: Dotted prefix applied to every key.

    Returns:
        A new dict keyed by dotted path.

    Example:
        >>> flatten_attributes({"user": {"id": 1}, "action": "login"})
        {'user.id': 1, 'action': 'login'}
    """
    flattened: dict[str, object] = {}
    for key, value in attributes.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping) and value:
            flattened.update(flatten_attributes(value, prefix=f"{path}."))
        else:
            flattened[path] = value
    return flattened


def lookup_attribute(attributes: Mapping[str, object], path: str) -> object:
    """Resolve a dotted path against nested or flattened attributes.

    An exact key wins. Otherwise the path is split at each dot, left to
    right, and the lookup descends into any mapping found under the prefix.

    Returns:
        The resolved value, or ``MISSING`` when no key matches.
    """
    if path in attributes:
        return attributes[path]

    index = path.find(".")
    while index != -1:
        head = path[:index]
        child = attributes.get(head, MISSING)
        if isinstance(child, Mapping):
            value = lookup_attribute(child, path[index + 1 :])
            if value is not MISSING:
                return value
        index = path.find(".", index + 1)
    return MISSING
