from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from pathlib import Path

from .config import LoaderConfig
from .errors import LoadError

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        sys.stderr.write(f"{self.prog}: error: {message}\n")
        raise SystemExit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="goapi",
        usage="goapi [options] package...",
        description="Print the exported API of Go packages, one sorted line per declaration.",
    )
    parser.add_argument("packages", nargs="*", help="Go package paths or patterns (e.g. ./...).")
    parser.add_argument(
        "-C",
        "--dir",
        default=None,
        help="Directory to resolve packages from (default: GOAPI_DIR or the current directory).",
    )
    parser.add_argument("--tags", default=None, help="Comma-separated Go build tags.")
    parser.add_argument("-o", "--output", default=None, help="Write the API to this file instead of stdout.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loader activity to stderr.")
    parser.add_argument("--version", action="store_true", help="Print goapi version.")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.version:
        try:
            print(importlib.metadata.version("goapi"))
        except importlib.metadata.PackageNotFoundError:
            print("0.0.0")
        return

    if not args.packages:
        parser.error("no packages given")

    from .loader import load_packages
    from .printer import format_api

    config = LoaderConfig.from_env().with_overrides(dir=args.dir, tags=args.tags)
    try:
        pkgs = load_packages(args.packages, config)
    except LoadError as e:
        print(e, file=sys.stderr)
        raise SystemExit(2) from None

    pkgs = sorted((p for p in pkgs if p.name != "main"), key=lambda p: p.path)
    logger.debug("formatting %d package(s)", len(pkgs))

    # Render everything before writing so a fatal formatting error leaves no output.
    text = "".join(format_api(p) for p in pkgs)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


if __name__ == "__main__":
    main()
