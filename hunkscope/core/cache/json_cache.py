# -----------------------------------------------------------------------------
# hunkscope - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of hunkscope.
#
# hunkscope is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


import hashlib
import json
import shutil
from pathlib import Path
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

DIFF_CACHE = "diff"
ANALYSIS_CACHE = "analysis"
REFINE_CACHE = "refine"
SPLIT_CACHE = "split"

ModelT = TypeVar("ModelT", bound=BaseModel)


def hash_key(text: str) -> str:
    """Deterministic 16 hex character key for arbitrary text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class JsonCache:
    """
    Stores JSON blobs under <root>/cache/<subdir>/<key>.json.

    The cache is best effort: a miss, a corrupt entry or a failed write is
    logged and otherwise ignored.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    @property
    def cache_dir(self) -> Path:
        return self.root / "cache"

    def _path(self, subdir: str, key: str) -> Path:
        return self.cache_dir / subdir / f"{key}.json"

    def read(self, subdir: str, key: str, model: type[ModelT] | None = None) -> Any:
        path = self._path(subdir, key)
        if not path.exists():
            logger.debug(f"Cache miss: {subdir}/{key}")
            return None

        try:
            data = path.read_text(encoding="utf-8")
            if model is not None:
                value = model.model_validate_json(data)
            else:
                value = json.loads(data)
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.debug(f"Ignoring unreadable cache entry {path}: {e}")
            return None

        logger.debug(f"Cache hit: {subdir}/{key}")
        return value

    def write(self, subdir: str, key: str, value: Any) -> None:
        path = self._path(subdir, key)
        try:
            if isinstance(value, BaseModel):
                data = value.model_dump_json(by_alias=True)
            else:
                data = json.dumps(value)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(data, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to write cache entry {path}: {e}")
            return

        logger.debug(f"Cached {subdir}/{key} ({len(data)} bytes)")

    def size(self) -> int:
        if not self.cache_dir.exists():
            return 0
        return sum(p.stat().st_size for p in self.cache_dir.rglob("*") if p.is_file())

    def clear(self) -> None:
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
            logger.debug(f"Removed {self.cache_dir}")
