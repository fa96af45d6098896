"""Environmental values a single report is rendered against."""
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional

from dateutil import tz as dateutil_tz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderEnvironment:
    """Current time, local timezone and terminal facts for one report.

    Everything is sampled once so that every row, and any total derived
    from them, sees the same "now".
    """

    now: datetime
    tz: tzinfo = timezone.utc
    is_terminal: bool = False
    width: Optional[int] = None

    @classmethod
    def detect(cls, stream=None) -> "RenderEnvironment":
        """Sample the environment for writing to ``stream``.

        Args:
            stream: Output stream; terminal detection is skipped when None

        Returns:
            A frozen RenderEnvironment
        """
        now = datetime.now(timezone.utc)
        local_tz = dateutil_tz.tzlocal()

        is_terminal = False
        width = None
        if stream is not None:
            try:
                is_terminal = stream.isatty()
            except (AttributeError, ValueError, OSError):
                is_terminal = False
            try:
                width = os.get_terminal_size(stream.fileno()).columns
            except (AttributeError, ValueError, OSError):
                width = None

        logger.debug("render environment: terminal=%s width=%s tz=%s", is_terminal, width, local_tz)
        return cls(now=now, tz=local_tz, is_terminal=is_terminal, width=width)
