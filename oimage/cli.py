"""
Command line interface for OImage.

Usage:
    oimage info photo.png
    oimage convert photo.png thumb.webp --format webp --width 320
    oimage convert photo.jpg - --scale 50 > half.jpg
    oimage from-data-uri upload.txt ./media/ avatar
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from oimage.core.exceptions import ImageError
from oimage.core.logging_setup import setup_logging
from oimage.models.image_format import ImageFormat
from oimage.models.schemas import ImageInfo
from oimage.services.image_handle import ImageHandle


def _octal(value: str) -> int:
    return int(value, 8)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oimage",
        description="Load, inspect, resize, rotate and convert JPEG/PNG/GIF/WEBP images"
    )
    parser.add_argument("--log-level", default=None, help="Log level (default from OIMAGE_LOG_LEVEL)")
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Print format and dimensions as JSON")
    info.add_argument("path")

    convert = commands.add_parser("convert", help="Write a transformed copy")
    convert.add_argument("source")
    convert.add_argument("destination", help="Output path, or '-' for stdout")
    convert.add_argument("--format", default="jpeg", type=ImageFormat.parse, dest="image_format")
    convert.add_argument("--quality", type=int, default=None, help="JPEG quality 0-100")
    convert.add_argument("--mode", type=_octal, default=None, help="File permissions, e.g. 644")
    convert.add_argument("--rotate", type=float, default=None, help="Degrees, counter-clockwise")
    size = convert.add_mutually_exclusive_group()
    size.add_argument("--resize", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"))
    size.add_argument("--width", type=int)
    size.add_argument("--height", type=int)
    size.add_argument("--scale", type=float, help="Percentage of the current size")

    from_uri = commands.add_parser("from-data-uri", help="Decode a data URI file into an image")
    from_uri.add_argument("file", help="Text file holding 'data:<mime>;base64,<payload>'")
    from_uri.add_argument("directory", help="Target directory")
    from_uri.add_argument("name", help="File name without extension")

    return parser


def run_info(args) -> int:
    with ImageHandle() as handle:
        handle.load(args.path)
        image_format = handle.get_image_type()
        info = ImageInfo(
            path=str(handle.source_path),
            format=image_format.name,
            mime_type=image_format.mime_type,
            width=handle.get_width(),
            height=handle.get_height()
        )
    print(info.model_dump_json(indent=2))
    return 0


def run_convert(args) -> int:
    with ImageHandle() as handle:
        handle.load(args.source)

        # rotate() re-reads the source file, so it has to come first
        if args.rotate is not None:
            handle.rotate(args.rotate)

        if args.resize is not None:
            handle.resize(*args.resize)
        elif args.width is not None:
            handle.resize_to_width(args.width)
        elif args.height is not None:
            handle.resize_to_height(args.height)
        elif args.scale is not None:
            handle.scale(args.scale)

        if args.destination == "-":
            handle.output(args.image_format)
        else:
            handle.save(args.destination, args.image_format, args.quality, args.mode)
    return 0


def run_from_data_uri(args) -> int:
    data = Path(args.file).read_text(encoding="utf-8").strip()
    extension = ImageHandle.get_image_extension(data)
    directory = str(Path(args.directory)) + "/"
    print(ImageHandle.save_image(directory, data, args.name, extension))
    return 0


COMMANDS = {
    "info": run_info,
    "convert": run_convert,
    "from-data-uri": run_from_data_uri,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        return COMMANDS[args.command](args)
    except (ImageError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
