from pathlib import Path
from typing import Any, Dict, Protocol


class FileHandler(Protocol):
    def match(self, path: Path) -> bool: ...

    def load(self, path: Path) -> Dict[str, Any]:
        """Reads one asset file into a flat mapping of message key -> template."""
        ...
