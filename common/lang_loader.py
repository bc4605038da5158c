# common/lang_loader.py
# -*- coding: utf-8 -*-
"""
Message catalogue loader for the installer.

Provides lookup of localized strings from the YAML catalogues stored in
``common/lang/<locale>.yaml``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

# Catalogue directory
LANG_DIR = Path(__file__).parent / "lang"

module_logger = logging.getLogger(__name__)


class Translator:
    """
    Resolves dot-separated message keys against per-locale YAML catalogues.

    Lookups fall back from the requested locale to the fallback locale and
    finally to the key itself, so a missing message never breaks output.
    """

    def __init__(
        self,
        locale: str = "en",
        fallback_locale: str = "en",
        lang_dir: Path = LANG_DIR,
    ):
        self.locale = locale
        self.fallback_locale = fallback_locale
        self.lang_dir = Path(lang_dir)
        self._catalogues: Dict[str, Dict[str, Any]] = {}

    def load_catalogue(self, locale: str) -> Dict[str, Any]:
        """
        Load the catalogue for a locale, caching the result.

        Raises:
            yaml.YAMLError: If the catalogue file cannot be parsed.
        """
        if locale in self._catalogues:
            return self._catalogues[locale]

        catalogue_path = self.lang_dir / f"{locale}.yaml"
        if not catalogue_path.is_file():
            module_logger.debug(
                f"No message catalogue for locale '{locale}' at {catalogue_path}"
            )
            self._catalogues[locale] = {}
            return self._catalogues[locale]

        try:
            with open(catalogue_path, "r", encoding="utf-8") as f:
                catalogue = yaml.safe_load(f)
        except yaml.YAMLError as e:
            module_logger.error(
                f"Error parsing message catalogue {catalogue_path}: {e}"
            )
            raise

        if not isinstance(catalogue, dict):
            catalogue = {}

        module_logger.debug(f"Loaded message catalogue from {catalogue_path}")
        self._catalogues[locale] = catalogue
        return catalogue

    def _lookup(self, locale: str, key: str) -> Optional[str]:
        current: Any = self.load_catalogue(locale)
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current if isinstance(current, str) else None

    def has(self, key: str) -> bool:
        return self._lookup(self.locale, key) is not None or (
            self._lookup(self.fallback_locale, key) is not None
        )

    def get(
        self, key: str, replacements: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Get a message by its key.

        Args:
            key: Dot-separated message key (e.g. "installer.install_failed_label")
            replacements: Values for ``:name`` placeholders in the message

        Returns:
            The localized message, or the key itself when it is not defined
        """
        message = self._lookup(self.locale, key)
        if message is None and self.fallback_locale != self.locale:
            message = self._lookup(self.fallback_locale, key)
        if message is None:
            module_logger.debug(f"Message '{key}' not found for '{self.locale}'")
            return key

        if replacements:
            # Longest names first so ":name" does not clobber ":name_full".
            for name in sorted(replacements, key=len, reverse=True):
                message = message.replace(f":{name}", str(replacements[name]))
        return message
