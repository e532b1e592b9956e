"""Icon and condition-text mapping.

Every provider reports conditions in its own vocabulary (WMO codes, icon
slugs, enum names, free text). Drivers translate those into the widget's
canonical icon ids (``"32"`` sunny, ``"31"`` clear night, ...) and canonical
English phrases. Localizing the phrase is the job of an injected
``Translator``.
"""

from __future__ import annotations

import gettext
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

NA_ICON = "na"


def _key(code: Any) -> str:
    # 0 is a valid code; only None/bool count as missing
    if code is None or isinstance(code, bool):
        return ""
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    return str(code).strip()


@dataclass(frozen=True)
class IconMap:
    """Provider code -> canonical icon id, with optional night overrides."""

    day: Mapping[str, str]
    night: Mapping[str, str] = field(default_factory=dict)

    def lookup(self, code: Any, is_daytime: bool = True) -> str:
        """Return the icon id for ``code``; ``"na"`` when unknown."""
        key = _key(code)
        if not key:
            return NA_ICON
        if not is_daytime and key in self.night:
            return self.night[key]
        return self.day.get(key, NA_ICON)


@dataclass(frozen=True)
class DescriptionMap:
    """Provider code or text -> canonical English phrase.

    Unknown input passes through unchanged so the translator still gets a
    chance at it.
    """

    phrases: Mapping[str, str] = field(default_factory=dict)
    night_phrases: Mapping[str, str] = field(default_factory=dict)

    def describe(self, code_or_text: Any, is_daytime: bool = True) -> str:
        key = _key(code_or_text)
        if not key:
            return ""
        if not is_daytime and key in self.night_phrases:
            return self.night_phrases[key]
        return self.phrases.get(key, key)


# =============================================================================
# Translation
# =============================================================================


class Translator(Protocol):
    """Renders a canonical English phrase in the user's language."""

    def translate(self, text: str) -> str: ...


class IdentityTranslator:
    """Leaves text untouched."""

    def translate(self, text: str) -> str:
        return text


class GettextTranslator:
    """
    Look phrases up in gettext catalogs.

    Domains are tried in order; the first catalog that knows the phrase wins.
    Missing catalogs are skipped, so the translator degrades to identity.
    """

    def __init__(
        self,
        domains: Sequence[str],
        localedir: Path | str | None = None,
        languages: Sequence[str] | None = None,
    ) -> None:
        self.catalogs: list[gettext.NullTranslations] = []
        for domain in domains:
            try:
                catalog = gettext.translation(
                    domain,
                    localedir=str(localedir) if localedir else None,
                    languages=list(languages) if languages else None,
                )
            except OSError:
                logger.debug("No gettext catalog for domain %s", domain)
                continue
            self.catalogs.append(catalog)

    def translate(self, text: str) -> str:
        for catalog in self.catalogs:
            translated = catalog.gettext(text)
            if translated and translated != text:
                return translated
        return text


def safe_translate(translator: Translator, text: str | None) -> str:
    """Translate ``text``, falling back to the input if the translator fails."""
    if not text:
        return ""
    try:
        result = translator.translate(text)
    except Exception:
        logger.warning("Translation failed for %r", text, exc_info=True)
        return text
    return result if isinstance(result, str) and result else text
