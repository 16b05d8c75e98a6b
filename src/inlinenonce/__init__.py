import logging

from .hook import FragmentSlot, PageFragments, on_pre_render_html, page_slots
from .mode import BuildMode
from .node import MarkupNode
from .options import DEFAULT_NONCE, NonceOptions, OptionsError
from .serialize import fragments_to_html, to_html
from .transform import annotate, matches, partition, process_slot, reassemble

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_NONCE",
    "BuildMode",
    "FragmentSlot",
    "MarkupNode",
    "NonceOptions",
    "OptionsError",
    "PageFragments",
    "annotate",
    "fragments_to_html",
    "matches",
    "on_pre_render_html",
    "page_slots",
    "partition",
    "process_slot",
    "reassemble",
    "to_html",
]
