from __future__ import annotations

import logging
import os
from pathlib import Path


logger = logging.getLogger("campus-lms.env")


def load_local_env(env_path: Path | str = Path(".env"), *, override: bool = False) -> int:
    """Load key=value pairs from a local .env file into os.environ.

    Variables already present in the environment are kept unless ``override``
    is set. Returns the number of variables written.
    """
    path = Path(env_path)
    if not path.exists():
        return 0

    loaded = 0
    for raw_line in path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            logger.warning("Skipping malformed .env line: %s", raw_line)
            continue

        key, value = line.split("=", 1)
        clean_key = key.strip()
        if not clean_key:
            continue
        if not override and clean_key in os.environ:
            continue
        os.environ[clean_key] = value.strip().strip('"').strip("'")
        loaded += 1

    logger.debug("Loaded %d variables from %s", loaded, path)
    return loaded
