"""Main module for the image resizer CLI."""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .resize_images import add_resize_arguments
from .resize_images import main as resize_images_main


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the unified command-line interface (CLI) of the Image Resizer.

    Sets up an `ArgumentParser` with the "resize" and "version" commands.
    For "resize", the remaining arguments are forwarded unchanged to the
    `main` function of `resize_images.py`, whose return value becomes the
    process exit status.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="image-resizer",
        description="Image Resizer - bounded-concurrency batch resizing of JPEG and PNG files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resize every JPEG in a folder to a 2560px longest side
  image-resizer resize --pattern "photos/*.jpg"

  # Smaller output, better filter, eight at a time on a thread pool
  image-resizer resize -p "photos/**/*.png" --long 1024 --betterResize \\
                       -c 8 --scheduler multithread

  # Show version
  image-resizer version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    resize_parser: argparse.ArgumentParser = subparsers.add_parser(
        "resize", help="Resize images matched by a glob pattern"
    )
    add_resize_arguments(resize_parser)

    subparsers.add_parser("version", help="Show version information")

    argv = list(sys.argv[1:] if argv is None else argv)
    args: argparse.Namespace = parser.parse_args(argv)

    if args.command == "resize":
        # resize_images owns its own parser; hand it the arguments after "resize"
        sys.exit(resize_images_main(argv[argv.index("resize") + 1 :]))

    elif args.command == "version":
        print("Image Resizer CLI")
        print(f"Version {__version__}")
        print("Bounded-concurrency JPEG/PNG batch resizing")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
