"""Plugin options for the nonce pass."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_NONCE = "DhcnhD3khTMePgXw"

# Hosts configured in camelCase keep working unchanged.
_KEY_ALIASES: dict[str, str] = {
    "disableOnDev": "disable_on_dev",
    "disable_on_dev": "disable_on_dev",
    "nonce": "nonce",
}


class OptionsError(ValueError):
    """Raised when user-supplied plugin options cannot be used."""


@dataclass(frozen=True, slots=True)
class NonceOptions:
    """Resolved options for one render call.

    - disable_on_dev: skip the pass entirely for development builds.
    - nonce: token written to every inline script/style. Not validated; an
      empty string is applied as-is.
    """

    disable_on_dev: bool = True
    nonce: str = DEFAULT_NONCE

    def __post_init__(self) -> None:
        if not isinstance(self.disable_on_dev, bool):
            msg = f"Option 'disable_on_dev' must be a bool, got {type(self.disable_on_dev).__name__}"
            raise OptionsError(msg)
        if not isinstance(self.nonce, str):
            msg = f"Option 'nonce' must be a str, got {type(self.nonce).__name__}"
            raise OptionsError(msg)

    @classmethod
    def from_mapping(cls, user_options: Mapping[str, Any] | NonceOptions | None = None) -> NonceOptions:
        """Merge `user_options` over the defaults."""
        if user_options is None:
            return cls()
        if isinstance(user_options, NonceOptions):
            return user_options

        resolved: dict[str, Any] = {}
        for key, value in user_options.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                # Hosts pass their own keys (e.g. "plugins") alongside ours.
                logger.debug("Ignoring unrecognised option %r", key)
                continue
            if name in resolved:
                msg = f"Option {key!r} given more than once"
                raise OptionsError(msg)
            resolved[name] = value
        return cls(**resolved)
