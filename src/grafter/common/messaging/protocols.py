from typing import Protocol


class Renderer(Protocol):
    """Presents an already formatted bus message at the given level."""

    def render(self, message: str, level: str) -> None:
        """
        Args:
            message: Template output with all parameters filled in.
            level: One of "debug", "info", "success", "warning", "error".
        """
        ...
