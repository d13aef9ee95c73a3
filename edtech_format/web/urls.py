"""
Mutable page URL used by the renderer for links and edit controls.

Behavior:
    - `param()` sets or replaces a query parameter in place and returns self.
    - `out(escaped=True)` returns an HTML-attribute-safe string; `str()` the raw URL.
    - Booleans encode as "1"/"0" so links stay stable across callers.
"""
from __future__ import annotations

import copy
import html
from typing import Dict, Mapping, Optional, Union
from urllib.parse import urlencode

ParamValue = Union[str, int, bool, None]


def _encode_value(value: ParamValue) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return "" if value is None else str(value)


class PageUrl:
    def __init__(
        self,
        path: str,
        params: Optional[Mapping[str, ParamValue]] = None,
        *,
        anchor: Optional[str] = None,
        base: str = "",
    ) -> None:
        self.path = path
        self.base = base
        self.anchor = anchor
        self.params: Dict[str, str] = {}
        for key, value in (params or {}).items():
            self.param(key, value)

    def param(self, key: str, value: ParamValue) -> "PageUrl":
        self.params[key] = _encode_value(value)
        return self

    def set_anchor(self, anchor: Optional[str]) -> "PageUrl":
        self.anchor = anchor or None
        return self

    def copy(self) -> "PageUrl":
        return copy.deepcopy(self)

    def out(self, escaped: bool = True) -> str:
        url = f"{self.base}{self.path}"
        if self.params:
            url = f"{url}?{urlencode(self.params)}"
        if self.anchor:
            url = f"{url}#{self.anchor}"
        return html.escape(url) if escaped else url

    def __str__(self) -> str:
        return self.out(escaped=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"PageUrl({self.out(escaped=False)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageUrl):
            return NotImplemented
        return self.out(escaped=False) == other.out(escaped=False)


__all__ = ["PageUrl"]
