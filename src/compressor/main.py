from __future__ import annotations

import argparse
import logging
import sys

from compressor.ui.main_window import MainWindow


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("PIL").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Compress and resize images in batches.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    app = MainWindow()
    app.mainloop()


if __name__ == "__main__":
    main()
