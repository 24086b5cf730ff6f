"""Logic for writing generated pages to disk."""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from api_documenter.page import Page

logger = logging.getLogger(__name__)


def output_file_for_page(out_root: Path, page_path: str) -> Path:
    """Determine the output file for a page path, creating its folder."""
    # classes/dog.md -> out_root/classes/dog.md
    p = out_root / page_path.lstrip("/")
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def clear_output_dir(out_root: Path) -> None:
    """Delete everything inside ``out_root``, keeping the folder itself."""
    print(f"Deleting old output from {out_root}")
    out_root.mkdir(parents=True, exist_ok=True)
    for child in out_root.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def write_pages(pages: Iterable[Page], out_root: Path) -> int:
    """Write every page as UTF-8 text and return the number written."""
    written = 0
    for page in pages:
        out_file = output_file_for_page(out_root, page.path)
        if out_file.exists():
            logger.warning("Overwriting %s", out_file)
        out_file.write_text(page.text, encoding="utf-8")
        written += 1
    return written
