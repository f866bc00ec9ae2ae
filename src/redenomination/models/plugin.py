"""Plugin hook bundle."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .rule import Direction, Rule

    BeforeConvertHook = Callable[[float, Direction, Rule], Optional[float]]
    AfterConvertHook = Callable[[float, float, Direction, Rule], Optional[float]]
    FormatHook = Callable[[float, Rule], Optional[str]]


class Plugin:
    """A named bundle of up to three optional hooks.

    An absent hook is a no-op. Plugins compare by identity, so the same
    instance that was registered on an engine must be passed to remove it.
    """

    def __init__(
        self,
        name: str = "plugin",
        before_convert: BeforeConvertHook | None = None,
        after_convert: AfterConvertHook | None = None,
        format: FormatHook | None = None,
    ):
        self.name = name
        self.before_convert = before_convert
        self.after_convert = after_convert
        self.format = format

    def __repr__(self) -> str:
        hooks = [h for h in ("before_convert", "after_convert", "format") if getattr(self, h) is not None]
        return f"Plugin(name={self.name!r}, hooks={hooks})"
