"""Phrase lookup for listing labels.

The listing code only asks for a phrase by locale and count; pluralisation
lives here, behind the ``PhraseLookup`` callable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

PhraseLookup: TypeAlias = Callable[[str, int], str]

_ITEMS_UNDER_FOLDER: dict[str, tuple[str, str]] = {
    "en": ("1 item under this folder.", "{count} items under this folder."),
    "fr": ("1 élément dans ce dossier.", "{count} éléments dans ce dossier."),
    "de": ("1 Datei in diesem Ordner.", "{count} Dateien in diesem Ordner."),
    "es": ("1 artículo en esta carpeta.", "{count} artículos en esta carpeta."),
    "ko": ("1건의 항목", "{count}건의 항목"),
}
_DEFAULT_LANGUAGE = "en"


def _language(locale: str) -> str:
    return locale.replace("_", "-").split("-", 1)[0].lower()


def items_under_folder(locale: str, count: int) -> str:
    """Default "N items under this folder" phrase; unknown locales fall back to English."""
    singular, plural = _ITEMS_UNDER_FOLDER.get(
        _language(locale), _ITEMS_UNDER_FOLDER[_DEFAULT_LANGUAGE]
    )
    return singular if count == 1 else plural.format(count=count)
