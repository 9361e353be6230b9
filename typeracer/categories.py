from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Basic"

DEFAULT_TEXT = (
    "The quick brown fox jumps over the lazy dog. Pack my box with five dozen "
    "liquor jugs. How vexingly quick daft zebras jump! Sphinx of black quartz, "
    "judge my vow. Typing well is mostly a matter of rhythm: keep your eyes on "
    "the text, let your fingers find the keys, and slow down when the errors "
    "start to pile up."
)


class Categories:
    """
    Practice texts on disk: every sub-directory of ``texts_dir`` is a
    category, every file in it one text.
    """

    def __init__(self, texts_dir: Union[str, Path], rng: Optional[random.Random] = None) -> None:
        self.texts_dir = Path(texts_dir)
        self._rng = rng or random.Random()

    def get_categories(self) -> List[str]:
        try:
            return sorted(p.name for p in self.texts_dir.iterdir() if p.is_dir())
        except OSError:
            logger.info("no texts directory at %s", self.texts_dir)
            return []

    def get_text(self, category: str) -> str:
        category_dir = self.texts_dir / category
        try:
            files = sorted(p for p in category_dir.iterdir() if p.is_file())
        except OSError:
            files = []
        if not files:
            logger.info("category %r has no texts, using the default text", category)
            return DEFAULT_TEXT

        path = self._rng.choice(files)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("cannot read %s, using the default text", path, exc_info=True)
            return DEFAULT_TEXT
        if not text:
            return DEFAULT_TEXT
        return text
