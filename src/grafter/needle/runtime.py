import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .loader import Loader
from .pointer import SemanticPointer

# Message templates shipped with the package.
ASSETS_ROOT = Path(__file__).resolve().parent.parent / "common" / "assets"


class Needle:
    """
    Resolves semantic pointers to message templates.
    """

    def __init__(self, roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self._registry: Dict[str, Dict[str, str]] = {}  # lang -> {fqn: template}
        self._loader = Loader()
        self._loaded_langs: Set[str] = set()
        self.roots = list(roots) if roots else [ASSETS_ROOT]

    def add_root(self, path: Path) -> None:
        """Adds an override root. Later roots win over earlier ones."""
        if path not in self.roots:
            self.roots.append(path)
            self.reload()

    def reload(self) -> None:
        self._registry.clear()
        self._loaded_langs.clear()

    def _ensure_lang_loaded(self, lang: str) -> None:
        if lang in self._loaded_langs:
            return

        merged_registry: Dict[str, str] = {}
        for root in self.roots:
            # Project-level overrides: .grafter/needle/<lang>
            hidden_path = root / ".grafter" / "needle" / lang
            if hidden_path.is_dir():
                merged_registry.update(self._loader.load_directory(hidden_path))

            # Packaged assets: needle/<lang>
            asset_path = root / "needle" / lang
            if asset_path.is_dir():
                merged_registry.update(self._loader.load_directory(asset_path))

        self._registry[lang] = merged_registry
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Resolves a semantic pointer to a template with graceful fallback.

        Lookup Order:
        1. Target language (explicit, or GRAFTER_LANG)
        2. Default language (en)
        3. Identity (the key itself)
        """
        key = str(pointer)
        target_lang = lang or os.getenv("GRAFTER_LANG", self.default_lang)

        self._ensure_lang_loaded(target_lang)
        val = self._registry.get(target_lang, {}).get(key)
        if val is not None:
            return val

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            val = self._registry.get(self.default_lang, {}).get(key)
            if val is not None:
                return val

        return key


# Global runtime instance
needle = Needle()
