"""1Password item naming."""


def item_name(host: str, prefix: str = "") -> str:
    """Return the item title for ``host``: the prefix followed by the host, verbatim."""
    return f"{prefix}{host}"
