import argparse
import logging
import sys
from pathlib import Path

from asciiramp.batch import convert_directory
from asciiramp.charsets import Tier
from asciiramp.config import Config
from asciiramp.converter import image_to_ascii
from asciiramp.errors import AsciiRampError


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image, or every image in a directory, as ASCII art")
    parser.add_argument("path", help="Path to an input image or a directory of images")
    parser.add_argument(
        "-r",
        "--resolution",
        default=Tier.LOW.value,
        choices=[tier.value for tier in Tier],
        help="Number of brightness levels: low=5, mid=9, high=17 (default: low)",
    )
    parser.add_argument("-W", "--width", type=positive_int, default=None, help="Output width in columns")
    parser.add_argument("-H", "--height", type=positive_int, default=None, help="Output height in rows")
    parser.add_argument(
        "-f",
        "--fit-height",
        action="store_true",
        default=False,
        help="Fit the terminal height instead of its width",
    )
    parser.add_argument(
        "-i", "--invert", action="store_true", default=False, help="Invert the ramp for light backgrounds"
    )
    parser.add_argument(
        "-j", "--jobs", type=positive_int, default=1, help="Images converted in parallel in directory mode"
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.from_options(
            tier=args.resolution,
            width=args.width,
            height=args.height,
            fit_height=args.fit_height,
            invert=args.invert,
        )
    except AsciiRampError as exc:
        parser.error(str(exc))

    path = Path(args.path)
    if path.is_dir():
        failed = 0
        for item in convert_directory(path, config, jobs=args.jobs):
            if item.ok:
                sys.stdout.write(item.text)
            else:
                failed += 1
                print(item.error, file=sys.stderr)
        return 1 if failed else 0

    try:
        text = image_to_ascii(path, config)
    except AsciiRampError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
