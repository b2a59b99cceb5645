from __future__ import annotations


class RenderError(Exception):
    """Base class for widget construction and painting failures."""


class WidgetInitError(RenderError):
    pass


class UnknownFontError(RenderError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown font {self.name!r}"


class InterpolationError(RenderError, ValueError):
    pass
