"""First-match profile selection."""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, Optional

from cbtr.core.profiles import Profile, Which

logger = logging.getLogger(__name__)


def find_match(
    profiles: Iterable[Profile],
    cwd: Path,
    repo_root: Path,
    *,
    which: Which = shutil.which,
) -> Optional[Profile]:
    """Return the first profile whose preconditions hold, or None.

    Order matters: earlier (more specific) profiles shadow later ones.
    """
    for profile in profiles:
        logger.debug("Checking conditions for %s", profile.name)
        if profile.matches(cwd, repo_root, which=which):
            logger.debug("Matched %s", profile.name)
            return profile
    return None


__all__ = ["find_match"]
