"""A tool for converting SVG to JSON.

This module provides a high-level function for extracting the shapes of SVG
files into JSON documents. It also serves as the main entry point for the
svgextract package.

The module includes:
- svg2json(): Convert SVG files to JSON programmatically.
- main(): Command-line interface for SVG to JSON conversion.
- Automatic file path handling and output generation.
"""

import argparse
import json
import sys
import textwrap
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from os.path import basename, dirname, exists, splitext
from typing import Optional

from svgextract import svgextract

try:
    __version__ = version("svgextract")
except PackageNotFoundError:
    __version__ = "unknown"


def svg2json(path: str, outputPat: Optional[str] = None, indent: int = 2) -> None:
    """Convert an SVG file to a JSON file listing its shapes.

    Args:
        path: Path to the input SVG file (.svg or .svgz extension).
        outputPat: Optional output path pattern. Supports placeholders:
            - %(dirname)s: Directory of input file
            - %(basename)s: Full filename with extension
            - %(base)s: Filename without extension
            - %(ext)s: File extension
            - %(now)s: Current datetime object
            - %(format)s: Output format (always "json")
            Also supports {name} format strings. The pattern "-" writes
            to standard output.
        indent: Indentation of the JSON output.

    Examples:
        >>> svg2json("input.svg")  # Creates "input.json"

        >>> svg2json("path/file.svg", "%(dirname)s/converted/%(base)s.json")
        # Creates "path/converted/file.json"

    Note:
        Existing JSON files are overwritten without warning. Coordinates that
        are not numbers are written as NaN.
    """

    # derive output filename from output pattern
    file_info = {
        "dirname": dirname(path) or ".",
        "basename": basename(path),
        "base": basename(splitext(path)[0]),
        "ext": splitext(path)[1],
        "now": datetime.now(),
        "format": "json",
    }
    out_pattern = outputPat or "%(dirname)s/%(base)s.%(format)s"
    # allow classic %%(name)s notation
    out_path = out_pattern % file_info
    # allow also newer {name} notation
    out_path = out_path.format(**file_info)

    try:
        shapes = svgextract.svg2data(path)
    except Exception:
        print("Conversion failed.")
        raise

    if shapes is None:
        return
    if out_path == "-":
        json.dump(shapes, sys.stdout, indent=indent)
        sys.stdout.write("\n")
    else:
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(shapes, f, indent=indent)


# command-line usage stuff
def main() -> None:
    """Main entry point for the CLI."""
    ext = "json"
    ext_caps = ext.upper()
    format_args = dict(
        prog=basename(sys.argv[0]),
        version=__version__,
        ts_pattern="{{dirname}}/out-"
        "{{now.hour}}-{{now.minute}}-{{now.second}}-"
        "%(base)s",
        ext=ext,
        ext_caps=ext_caps,
    )
    format_args["ts_pattern"] += ".%s" % format_args["ext"]
    desc = "{prog} v. {version}\n".format(**format_args)
    desc += "An extractor of SVG shapes and styles to {}\n".format(ext_caps)
    epilog = textwrap.dedent(
        """\
        examples:
          # convert path/file.svg to path/file.{ext}
          {prog} path/file.svg

          # convert file1.svg to file1.{ext} and file2.svgz to file2.{ext}
          {prog} file1.svg file2.svgz

          # print the shapes of file.svg
          {prog} -o - file.svg

          # convert all SVG files in path/ to {ext_caps} files with names like:
          # path/file1.svg -> file1.{ext}
          {prog} -o "%(base)s.{ext}" path/file*.svg

          # like before but with timestamp in the {ext_caps} files:
          # path/file1.svg -> path/out-12-58-36-file1.{ext}
          {prog} -o {ts_pattern} path/file*.svg
        """.format(**format_args)
    )
    p = argparse.ArgumentParser(
        description=desc,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument(
        "-v", "--version", help="Print version number and exit.", action="store_true"
    )

    p.add_argument(
        "-o",
        "--output",
        metavar="PATH_PAT",
        help="Set output path (incl. the placeholders: dirname, basename,"
        "base, ext, now) in both, %%(name)s and {name} notations, "
        "or - for standard output.",
    )

    p.add_argument(
        "--indent",
        metavar="N",
        type=int,
        default=2,
        help="Indentation of the JSON output (default: 2).",
    )

    p.add_argument(
        "input",
        metavar="PATH",
        nargs="*",
        help="Input SVG file path with extension .svg or .svgz.",
    )

    args = p.parse_args()

    if args.version:
        print(__version__)
        sys.exit()

    if not args.input:
        p.print_usage()
        sys.exit()

    paths = [a for a in args.input if exists(a)]
    for path in paths:
        svg2json(path, outputPat=args.output, indent=args.indent)
