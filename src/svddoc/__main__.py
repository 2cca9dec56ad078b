from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from svddoc.app import run_app
from svddoc.layout.bit_spans import BitLayoutError
from svddoc.svd.svd_loader import SvdParseError
from svddoc.utils.logger import LOG_LEVELS, get_logger

log = get_logger("svddoc")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="svddoc", description="Render CMSIS-SVD register maps as HTML pages")
    p.add_argument("-i", "--input", type=Path, required=True, help="CMSIS-SVD XML file path")
    p.add_argument("-o", "--output", type=Path, default=Path("output"), help="Output directory (default: output)")

    # Logging
    p.add_argument("--log-level", default="INFO", choices=list(LOG_LEVELS))
    p.add_argument("--quiet", action="store_true", help="Reduce console output")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        run_app(
            svd_path=args.input,
            output_dir=args.output,
            log_level=args.log_level,
            quiet=args.quiet,
        )
    except (SvdParseError, BitLayoutError, OSError) as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
