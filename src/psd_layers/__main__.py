import argparse
import logging
from typing import Optional

from psd_layers import PSDDocument
from psd_layers.exceptions import PSDError
from psd_layers.version import __version__

logger = logging.getLogger("psd_layers")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-layers command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--encoding", default="macroman", help="Layer name encoding [default: macroman]."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export a layer as an image")
    export_parser.add_argument("input_file", help="Input PSD file")
    export_parser.add_argument("index", type=int, help="Layer index, 0 is top-most")
    export_parser.add_argument("output_file", help="Output image file")

    show_parser = subparsers.add_parser("show", help="Show the layer list")
    show_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    try:
        psd = PSDDocument.open(args.input_file, encoding=args.encoding)
    except PSDError as e:
        logger.error("%s: %s" % (args.input_file, e))
        return 1

    if args.command == "export":
        try:
            layer = psd[args.index]
        except IndexError:
            logger.error("No layer at index %d (%d layers)" % (args.index, len(psd)))
            return 1
        layer.topil().save(args.output_file)

    elif args.command == "show":
        print("%dx%d, %d channels" % (psd.width, psd.height, psd.channels))
        for index, layer in enumerate(psd):
            print("[%d] %s" % (index, "/".join(layer.path)))
        for warning in psd.warnings:
            print("warning: %s (layer %s)" % (warning.message, warning.layer_index))

    return None


if __name__ == "__main__":
    raise SystemExit(main())
