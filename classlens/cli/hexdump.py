""" Display file contents in hexadecimal """

import argparse
from .base import base_parser, positive_int, LogSetup
from ..utils.hexdump import hexdump as dump, hex_listing


parser = argparse.ArgumentParser(description=__doc__, parents=[base_parser])
parser.add_argument(
    "file",
    metavar="file",
    type=argparse.FileType("rb"),
    help="File to dump contents of",
)
parser.add_argument(
    "--width", default=16, type=positive_int,
    help="Number of bytes per line of the hexdump."
)
parser.add_argument(
    "--canonical", "-C", action="store_true", default=False,
    help="Show offsets and printable characters next to the hex bytes.",
)


def hexdump(args=None):
    """ Display file contents in hexadecimal """
    args = parser.parse_args(args)
    with LogSetup(args):
        contents = args.file.read()
        args.file.close()
        if args.canonical:
            dump(contents, width=args.width)
        elif contents:
            print(hex_listing(contents, width=args.width))


if __name__ == "__main__":
    hexdump()
