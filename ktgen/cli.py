# ktgen - a generator for KTouch typing courses.
# Copyright (C) 2022 Joerg H. Mueller
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

# command line interface

import argparse
import logging
import os
import random
import sys

from . import __version__, settings
from .course import Course, read_lesson_specification, write_course
from .dictionary import build_dictionary
from .filters import lesson_contains_at_least_different_words, relative_levenshtein_distance_from_lesson_before
from .lessons import build_lessons

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def create_parser():
    parser = argparse.ArgumentParser(
        prog="ktgen",
        description="Generate a KTouch typing course from a lesson specification or a KTouch keyboard layout export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="A lesson specification is a whitespace separated list of symbol groups, e.g. \"fj dk sl a; [sch] (WW) 123\".",
    )
    parser.add_argument(
        "specifications",
        nargs="*",
        metavar="SPEC",
        help=f"Keyboard layout export (.xml), specification file or specification text (default: {settings.lesson_specification_file})"
    )
    parser.add_argument("--output-file", "-of", action="append", help=f"Course output file, repeatable (default: {settings.output_file})")
    parser.add_argument("--stdout", "-o", action="store_true", help="Print the course")
    parser.add_argument("--text-file", "-file", action="append", help="Text file to take dictionary words from, repeatable")
    parser.add_argument("--word-list", action="append", help="Word list (word<TAB>count) to take dictionary words from, repeatable")
    parser.add_argument("--dictionary-size", "-size", type=int, default=settings.dictionary_size, help="Maximum number of dictionary words")
    parser.add_argument("--lesson-length", "-length", type=int, default=settings.lesson_length, help="Non-whitespace characters per lesson")
    parser.add_argument("--line-length", "-line", type=int, default=settings.line_length, help="Average line length")
    parser.add_argument("--min-word-length", "-min", type=int, default=settings.min_word_length, help="Minimum length of dictionary words")
    parser.add_argument("--max-word-length", "-max", type=int, default=settings.max_word_length, help="Maximum length of dictionary words")
    parser.add_argument("--text-distance", "-td", type=float, default=settings.text_distance, help="Minimum relative levenshtein distance to the lesson before, in [0.0, 1.0]")
    parser.add_argument("--word-diversity", "-wd", type=int, default=settings.word_diversity, help="Minimum number of different words per lesson")
    parser.add_argument("--summary-every", "-se", type=int, default=settings.summary_every, help="Summary lesson every n lesson specifications (0 disables summaries)")
    parser.add_argument("--letters-only", action="store_true", help="Only use letters of a keyboard layout")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible courses")
    parser.add_argument("--workers", type=int, default=None, help="Number of threads generating lesson texts")
    parser.add_argument("--title", default=None, help="Course title")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(args):
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT)


def run(config):
    errors = config.errors()
    for error in errors:
        logger.error(error)
    if errors:
        return 1

    for warning in config.validate():
        logger.warning(warning)

    sources = config.specifications
    if not sources and os.path.isfile(settings.lesson_specification_file):
        sources = (settings.lesson_specification_file,)

    specifications = []
    for source in sources:
        specifications.extend(read_lesson_specification(source, config.letters_only))

    if not specifications:
        logger.error(settings.MISSING_SPECIFICATION_ERROR)
        return 1

    logger.info(f"Lesson specification: {' '.join(specifications)}")

    dictionary = []
    if config.uses_dictionary:
        dictionary = build_dictionary(config.text_files, config.word_lists, config.min_word_length, config.max_word_length, config.dictionary_size)
        logger.info(f"Dictionary with {len(dictionary)} words")

    lesson_filters = [
        relative_levenshtein_distance_from_lesson_before(config.text_distance),
        lesson_contains_at_least_different_words(config.word_diversity),
    ]

    lessons = build_lessons(
        specifications,
        dictionary,
        line_length=config.line_length,
        symbols_per_lesson=config.lesson_length,
        summary_every=config.summary_every,
        lesson_filters=lesson_filters,
        rng=random.Random(config.seed),
        max_workers=config.workers,
    )

    course = Course(title=config.course['title'],
                    description=config.course['description'],
                    keyboard_layout=config.course['keyboardLayout'],
                    lessons=lessons)

    write_course(course, config.output_files)

    return 0


def main(argv=None):
    args = create_parser().parse_args(argv)
    configure_logging(args)
    return run(settings.Settings.from_args(args))


def main_entry():
    sys.exit(main())
