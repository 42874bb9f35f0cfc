"""Rendering targets for presented values"""
from dataclasses import dataclass
from typing import Optional, Protocol


class Renderer(Protocol):
    """Anything a criteria can present a value onto"""

    def set_text(self, text: str) -> None:
        ...

    def set_background_color(self, color: str) -> None:
        ...


@dataclass
class RecordingRenderer:
    """Renderer that keeps whatever was written to it"""
    text: Optional[str] = None
    background_color: Optional[str] = None

    def set_text(self, text: str) -> None:
        self.text = text

    def set_background_color(self, color: str) -> None:
        self.background_color = color
