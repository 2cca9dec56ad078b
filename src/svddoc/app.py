from __future__ import annotations

from pathlib import Path

from svddoc.pages.writer import PageWriter
from svddoc.render.html import HtmlRenderer
from svddoc.svd.svd_loader import load_svd
from svddoc.utils.logger import get_logger, setup_logging

log = get_logger(__name__)


def run_app(
    svd_path: Path,
    output_dir: Path,
    log_level: str = "INFO",
    quiet: bool = False,
) -> list[Path]:
    setup_logging(level=log_level, quiet=quiet)

    log.info("svddoc starting")
    log.info("SVD: %s", svd_path)
    log.info("Output: %s", output_dir)

    # parse everything before touching the output directory
    device = load_svd(svd_path)

    writer = PageWriter(HtmlRenderer(), output_dir)
    written = writer.write_device(device)
    log.info("Wrote %d page(s) for %s", len(written), device.name)
    return written
