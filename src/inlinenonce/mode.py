from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum

ENV_VARS: tuple[str, ...] = ("INLINENONCE_ENV", "NODE_ENV")


class BuildMode(Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildMode:
        """Resolve the build mode from the first environment variable that is set.

        Only "development" selects DEVELOPMENT; anything else is PRODUCTION.
        """
        env = os.environ if environ is None else environ
        for name in ENV_VARS:
            value = env.get(name)
            if value is not None:
                if value.strip().lower() == cls.DEVELOPMENT.value:
                    return cls.DEVELOPMENT
                return cls.PRODUCTION
        return cls.PRODUCTION
