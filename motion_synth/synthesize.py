"""
Motion synthesizer:
- Tracker CSV (sec,usec,x,y,z,qw,qx,qy,qz), sorted by time
- Time reference CSV (sec,usec,...), sorted by time
- For each reference row, lerp position / slerp orientation between the two
  bracketing tracker rows and prepend the result to the row
- Output CSV (outData.csv by default)

Deps:
  uv add numpy pyyaml
"""

from __future__ import annotations

import logging
import sys

from .config import SynthConfig, parse_args
from .errors import HeaderMismatchError, InsufficientTrackerDataError
from .pipeline import synthesize_files

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_OR_HEADER = 1
EXIT_INSUFFICIENT_TRACKER_DATA = 3


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(cfg: SynthConfig) -> int:
    try:
        synthesize_files(cfg)
    except HeaderMismatchError as exc:
        logger.error("[INPUT] %s", exc)
        return EXIT_IO_OR_HEADER
    except InsufficientTrackerDataError as exc:
        logger.error("[TRACKER] %s", exc)
        return EXIT_INSUFFICIENT_TRACKER_DATA
    except OSError as exc:
        logger.error("[INPUT] %s", exc)
        return EXIT_IO_OR_HEADER
    except UnicodeError as exc:
        logger.error("[INPUT] undecodable input: %s", exc)
        return EXIT_IO_OR_HEADER
    return EXIT_OK


def main(argv=None) -> int:
    cfg = parse_args(argv)
    configure_logging(cfg.log_level)
    logger.info("[INPUT] tracker=%s timestamps=%s output=%s", cfg.tracker, cfg.timestamps, cfg.output)
    return run(cfg)


if __name__ == "__main__":
    sys.exit(main())
