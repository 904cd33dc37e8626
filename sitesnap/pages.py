"""Discovery of HTML pages and mapping them onto screenshot paths."""

from __future__ import annotations

import glob
import logging
import os
from typing import List

from .errors import DiscoveryError
from .models import PageTask

logger = logging.getLogger("sitesnap")

HTML_SUFFIX = ".html"
PNG_SUFFIX = ".png"
INDEX_PAGE = "index.html"


def discover_pages(site_dir: str) -> List[str]:
    """Return every ``*.html`` file beneath ``site_dir``, sorted."""
    if not os.path.isdir(site_dir):
        raise DiscoveryError(f"Site directory does not exist: {site_dir}")
    if not os.access(site_dir, os.R_OK | os.X_OK):
        raise DiscoveryError(f"Site directory is not readable: {site_dir}")
    pattern = os.path.join(glob.escape(site_dir), "**", "*" + HTML_SUFFIX)
    pages = sorted(
        path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path)
    )
    logger.debug("Found %d HTML files under %s", len(pages), site_dir)
    return pages


def build_page_task(source_file_path: str, site_dir: str, output_dir: str) -> PageTask:
    """Map a source file onto its URL and output image path.

    Plain string substitution: the first occurrence of ``site_dir`` becomes
    ``output_dir`` and a trailing ``.html`` becomes ``.png``. Nothing is
    normalized or URL-encoded.
    """
    source_url = "file://" + source_file_path
    output_image_path = source_file_path.replace(site_dir, output_dir, 1)
    if output_image_path.endswith(HTML_SUFFIX):
        output_image_path = output_image_path[: -len(HTML_SUFFIX)] + PNG_SUFFIX
    return PageTask(
        source_file_path=source_file_path,
        source_url=source_url,
        output_image_path=output_image_path,
        is_index_page=os.path.basename(source_file_path) == INDEX_PAGE,
    )


def build_page_tasks(site_dir: str, output_dir: str) -> List[PageTask]:
    return [
        build_page_task(path, site_dir, output_dir)
        for path in discover_pages(site_dir)
    ]
