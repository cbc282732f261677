"""Concatenate vCard files into a single vCard stream."""

from __future__ import annotations

import glob
import sys
from argparse import ArgumentParser

import textdirectory as td
from textdirectory.exceptions import DirectoryError
from textdirectory.helper import logger
from textdirectory.vcard import NOTE_TYPE, read_vcards, write_vcards


def expand_inputs(patterns) -> list[str]:
    """Expand wildcards; a pattern matching nothing is kept so that opening it reports the error."""
    paths = []
    for pattern in patterns:
        paths.extend(sorted(glob.glob(pattern)) or [pattern])
    return paths


def cat_vcards(paths, output, combine_notes=False):
    vcards = []
    for path in paths:
        logger.info(f"... Reading {path}")
        with open(path, "rb") as f:
            vcards.extend(read_vcards(f.read()))
    single_value_names = (NOTE_TYPE,) if combine_notes else ()
    write_vcards(vcards, output, single_value_names=single_value_names)
    return len(vcards)


def main(argv=None):
    options = get_options(argv)
    paths = expand_inputs(options.inputs)
    try:
        if options.output:
            with open(options.output, "w", encoding="utf-8", newline="") as out:
                count = cat_vcards(paths, out, options.combine_notes)
        else:
            count = cat_vcards(paths, sys.stdout, options.combine_notes)
    except (OSError, DirectoryError) as e:
        logger.error(f"vcard_cat: {e}")
        return 1
    logger.info(f"Wrote {count} vCard(s)")
    return 0


def get_options(argv=None):
    parser = ArgumentParser(description="vcard_cat reads vCard files and writes them out as one vCard stream.")
    parser.add_argument("-V", "--version", action="version", version=td.VERSION)
    parser.add_argument("inputs", nargs="+", metavar="vcf_file", help="vCard files, wildcards allowed")
    parser.add_argument("-o", "--output", dest="output", default=None, help="file to write, standard output if not given")
    parser.add_argument(
        "-n",
        "--combine-notes",
        dest="combine_notes",
        action="store_true",
        default=False,
        help="write all the notes of a vCard as a single NOTE",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("Aborted")
