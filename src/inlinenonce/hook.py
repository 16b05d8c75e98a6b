"""Pre-render hook: tag inline script/style fragments of one page with a nonce.

The host hands over a page object exposing a fetch/replace pair per fragment
slot (head, pre-body, post-body). The hook runs once per rendered page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .mode import BuildMode
from .options import NonceOptions
from .transform import TARGET_TAGS, process_slot

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from typing import Protocol

    class FragmentPage(Protocol):
        def get_head_components(self) -> Sequence[Any]: ...
        def replace_head_components(self, nodes: list[Any]) -> None: ...
        def get_pre_body_components(self) -> Sequence[Any]: ...
        def replace_pre_body_components(self, nodes: list[Any]) -> None: ...
        def get_post_body_components(self) -> Sequence[Any]: ...
        def replace_post_body_components(self, nodes: list[Any]) -> None: ...


logger = logging.getLogger(__name__)

SLOT_NAMES: tuple[str, ...] = ("head", "pre_body", "post_body")


@dataclass(frozen=True, slots=True)
class FragmentSlot:
    name: str
    fetch: Callable[[], Sequence[Any]]
    replace: Callable[[list[Any]], None]


def page_slots(page: FragmentPage) -> tuple[FragmentSlot, ...]:
    """Return the head, pre-body and post-body slots of `page`, in that order."""
    return tuple(
        FragmentSlot(
            name,
            getattr(page, f"get_{name}_components"),
            getattr(page, f"replace_{name}_components"),
        )
        for name in SLOT_NAMES
    )


def on_pre_render_html(
    pathname: str,
    page: FragmentPage,
    options: Mapping[str, Any] | NonceOptions | None = None,
    *,
    mode: BuildMode = BuildMode.PRODUCTION,
) -> None:
    """Add the configured nonce to every inline <script> and <style> of a page.

    With `disable_on_dev` set (the default) and a development build, no slot
    is read or replaced. Otherwise each slot is replaced once per tag type,
    six replacements in total, all using the same nonce.
    """
    opts = NonceOptions.from_mapping(options)

    if mode is BuildMode.DEVELOPMENT and opts.disable_on_dev:
        return

    logger.info("Adding nonce '%s' in file: '%s'", opts.nonce, pathname)

    slots = page_slots(page)
    for tag_type in TARGET_TAGS:
        for slot in slots:
            process_slot(slot.fetch, tag_type, opts.nonce, slot.replace)


@dataclass
class PageFragments:
    """In-memory fragment store implementing the page protocol.

    Each replace call swaps in a fresh list; `replace_count` records how many
    times each slot was written.
    """

    head: list[Any] = field(default_factory=list)
    pre_body: list[Any] = field(default_factory=list)
    post_body: list[Any] = field(default_factory=list)
    replace_count: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SLOT_NAMES, 0))

    def _replace(self, name: str, nodes: Sequence[Any]) -> None:
        setattr(self, name, list(nodes))
        self.replace_count[name] += 1

    def get_head_components(self) -> list[Any]:
        return self.head

    def replace_head_components(self, nodes: Sequence[Any]) -> None:
        self._replace("head", nodes)

    def get_pre_body_components(self) -> list[Any]:
        return self.pre_body

    def replace_pre_body_components(self, nodes: Sequence[Any]) -> None:
        self._replace("pre_body", nodes)

    def get_post_body_components(self) -> list[Any]:
        return self.post_body

    def replace_post_body_components(self, nodes: Sequence[Any]) -> None:
        self._replace("post_body", nodes)
