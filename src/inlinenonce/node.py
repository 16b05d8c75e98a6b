"""Fragment node model for page head/pre-body/post-body component lists."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class MarkupNode:
    """One rendered element placed into a page fragment slot.

    - tag_name: e.g. 'script', 'style', 'link', 'meta'.
    - attrs: attribute mapping; a None value renders as a bare attribute.
      Stored read-only; use with_attr/with_attrs to change it.
    - inline_content: raw text placed directly inside the element. None for
      elements that only reference an external resource.
    - children: opaque child content, never examined by the nonce pass.
    - key: identity used by the host for diffing; carried onto clones.
    """

    tag_name: str
    attrs: Mapping[str, str | None] = field(default_factory=dict)
    inline_content: str | None = None
    children: tuple[Any, ...] = ()
    key: str | None = None

    def __post_init__(self) -> None:
        if not self.tag_name:
            msg = "Empty tag_name passed to MarkupNode (host produced a blank element)"
            raise ValueError(msg)

        # Lowercase attribute names deterministically; keep first occurrence.
        lowered: dict[str, str | None] = {}
        for name, value in (self.attrs or {}).items():
            lname = str(name).lower()
            if lname not in lowered:
                lowered[lname] = value
        object.__setattr__(self, "attrs", MappingProxyType(lowered))

        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        # Attribute order does not affect equality, so it must not affect the hash.
        return hash((self.tag_name, frozenset(self.attrs.items()), self.inline_content, self.children, self.key))

    @property
    def is_inline(self) -> bool:
        content = self.inline_content
        return isinstance(content, str) and len(content) > 0

    def with_attr(self, name: str, value: str | None) -> MarkupNode:
        return self.with_attrs({name: value})

    def with_attrs(self, overrides: Mapping[str, str | None]) -> MarkupNode:
        """Return a copy whose attribute mapping has `overrides` applied.

        The copy gets its own attribute dict; the original node is untouched.
        """
        merged = dict(self.attrs)
        for name, value in overrides.items():
            merged[str(name).lower()] = value
        return replace(self, attrs=merged)

    def __repr__(self) -> str:
        if self.is_inline:
            preview = self.inline_content[:30]  # type: ignore[index]
            return f"MarkupNode(<{self.tag_name}>, inline={preview!r}, attrs={dict(self.attrs)!r})"
        return f"MarkupNode(<{self.tag_name}>, attrs={dict(self.attrs)!r})"
