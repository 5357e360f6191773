"""Human-friendly string ordering for text sort columns."""

from __future__ import annotations

import locale
import unicodedata

_NUL = "\x00"


def _strip_marks(text: str) -> str:
    return "".join(char for char in text if unicodedata.category(char) != "Mn")


def collation_key(value: str) -> tuple[str, str, str]:
    """Return a sort key that orders ``value`` the way a dictionary would.

    Strings compare by base letters first, then by accents, then by case with
    lowercase ahead of uppercase, so ``apple < Apple < banana`` and
    ``eclair < éclair < Ezra``. The first two levels pass through
    :func:`locale.strxfrm`, so an active ``LC_COLLATE`` refines the order; the
    key does not depend on one being set.

    Args:
        value: Field text. NUL characters are ignored.

    Returns:
        tuple[str, str, str]: Primary, secondary and tertiary comparison keys.
    """
    text = value.replace(_NUL, "")
    decomposed = unicodedata.normalize("NFD", text)
    primary = _strip_marks(decomposed).casefold()
    secondary = decomposed.casefold()
    return (locale.strxfrm(primary), locale.strxfrm(secondary), text.swapcase())


def use_user_collation() -> bool:
    """Adopt the user's ``LC_COLLATE`` setting; return False when it is unusable."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        return False
    return True


__all__ = ["collation_key", "use_user_collation"]
