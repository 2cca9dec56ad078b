from __future__ import annotations

from pathlib import Path
from typing import Union

from svddoc.pages.assembly import build_index_page, build_peripheral_page
from svddoc.pages.context import IndexPage, PeripheralPage
from svddoc.svd.model import SvdDevice
from svddoc.utils.logger import get_logger

log = get_logger(__name__)

PAGE_SUFFIX = ".html"
INDEX_PAGE = "index"


class PageRenderer:
    def render(self, template: str, context: Union[PeripheralPage, IndexPage]) -> str:
        """Turn a page context into the text of the named template."""
        raise NotImplementedError


class PageWriter:
    def __init__(self, renderer: PageRenderer, output_dir: Path):
        self.renderer = renderer
        self.output_dir = Path(output_dir)

    def page_path(self, name: str) -> Path:
        return self.output_dir / f"{name}{PAGE_SUFFIX}"

    def write_page(self, name: str, text: str) -> Path:
        path = self.page_path(name)
        path.write_text(text, encoding="utf-8")
        log.info("Wrote %s", path)
        return path

    def write_device(self, device: SvdDevice) -> list[Path]:
        """Write one page per peripheral plus the index; returns the written paths."""
        # lay out and render everything first; nothing is written on failure
        texts: list[tuple[str, str]] = []
        for p in device.peripherals:
            texts.append((p.name, self.renderer.render("peripheral", build_peripheral_page(p))))
        texts.append((INDEX_PAGE, self.renderer.render("index", build_index_page(device))))

        log.debug("Output directory: %s", self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for name, text in texts:
            written.append(self.write_page(name, text))
        return written
