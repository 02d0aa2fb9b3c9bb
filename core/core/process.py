"""Process replacement via ``os.execv``."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

import structlog

from .interfaces import ProcessControl

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)


class ExecProcessControl(ProcessControl):
    """Replaces the running interpreter with another program."""

    def replace(self, executable: str, args: Sequence[str]) -> OSError | None:
        argv = list(args) or [executable]
        logger.debug("exec", executable=executable, args=argv)
        # buffered output would be lost with the old process image
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execv(executable, argv)
        except OSError as e:
            return e
        return None  # pragma: no cover - execv only returns by raising
