from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .categories import Categories
from .config import load_config, setup_logging
from .history import FileHistoryLog

logger = logging.getLogger("typeracer")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="typeracer", description="Terminal typing practice")
    p.add_argument("texts_dir", nargs="?", type=Path, default=None, help="Directory of text categories (default from config, ./texts)")
    p.add_argument("--config", type=Path, default=None, help="Path to a JSON config file")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = load_config(args.config)
    if args.texts_dir is not None:
        settings.texts_dir = args.texts_dir
    setup_logging(settings)
    logger.info("texts from %s, history at %s", settings.texts_dir, settings.history_path)

    try:
        from .app import TypingTUI
    except ModuleNotFoundError as exc:
        missing = getattr(exc, "name", "")
        hint = "python3 -m pip install -U rich textual"
        print(f"Missing dependency '{missing}'. Install with: {hint}")
        raise SystemExit(1) from exc

    TypingTUI(
        settings=settings,
        categories=Categories(settings.texts_dir),
        history=FileHistoryLog(settings.history_path),
    ).run()


if __name__ == "__main__":
    main()
