"""User name normalization."""

import re

_NON_ALNUM = re.compile(r"[\W_]+")


def _split_camel(name: str) -> str:
    chars = []
    previous = ""
    for char in name:
        if char.isupper() and (previous.islower() or previous.isdigit()):
            chars.append("_")
        chars.append(char)
        previous = char
    return "".join(chars)


def normalize_name(display_name: str, fallback_id: str = "") -> str:
    """Derive a stable, lowercase, underscore separated user name.

    ``"TestUser"``, ``"Test User"`` and ``" test-user "`` all become
    ``"test_user"``. Letters outside ASCII are kept (``"Renée Smith"``
    becomes ``"renée_smith"``). Names with no alphanumeric characters fall
    back to ``user_<fallback_id>``.
    """
    name = _split_camel(display_name or "")
    name = _NON_ALNUM.sub("_", name).lower().strip("_")

    if not name and fallback_id:
        return f"user_{fallback_id}"
    return name
