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

# course settings that may be changed (for modifying the lessons generated per specification, see the recipes in lessons.py)

from dataclasses import dataclass, field
from typing import Optional

course = {
    'title': 'ktgen course',
    'description': 'Generated with ktgen.',
    'keyboardLayout': '',
}

# the file read when no lesson specification is given on the command line
lesson_specification_file = 'lesson_specification.ktgen'
output_file = 'ktgen_course.xml'

# non-whitespace characters per lesson and the average line length
lesson_length = 300
line_length = 50

# words of the dictionary
min_word_length = 2
max_word_length = 100
dictionary_size = 4000

# minimum relative levenshtein distance to the lesson before, in [0.0, 1.0]
text_distance = 0.3

# minimum different words per lesson
word_diversity = 5

# a summary lesson after this many lesson specifications
summary_every = 4

LESSON_LENGTH_ERROR = 'The lesson length must be at least 1.'
LINE_LENGTH_ERROR = 'The average line length must be at least 1.'
TEXT_DISTANCE_WARNING = 'Text distance must be in [0.0, 1.0]. Proceeding without text distance check.'
WORD_DIVERSITY_WARNING = 'Minimum word diversity per lesson must be at least 1. Proceeding without word diversity check.'
WORD_LENGTH_WARNING = 'The minimum word length is greater than maximum word length. No dictionary is used.'
DICTIONARY_SIZE_WARNING = 'The dictionary size must be at least 1. No dictionary is used.'
MISSING_SPECIFICATION_ERROR = 'Missing (or empty) lesson specification. No course is created.'


@dataclass(frozen=True)
class Settings:
    specifications: tuple = ()
    output_files: tuple = (output_file,)
    text_files: tuple = ()
    word_lists: tuple = ()
    dictionary_size: int = dictionary_size
    lesson_length: int = lesson_length
    line_length: int = line_length
    min_word_length: int = min_word_length
    max_word_length: int = max_word_length
    text_distance: float = text_distance
    word_diversity: int = word_diversity
    summary_every: int = summary_every
    letters_only: bool = False
    seed: Optional[int] = None
    workers: Optional[int] = None
    course: dict = field(default_factory=lambda: dict(course))

    @classmethod
    def from_args(cls, args):
        output_files = list(args.output_file or [])
        if args.stdout:
            output_files.append('stdout')
        if not output_files:
            output_files.append(output_file)

        course_data = dict(course)
        if args.title:
            course_data['title'] = args.title

        return cls(specifications=tuple(args.specifications or ()),
                   output_files=tuple(output_files),
                   text_files=tuple(args.text_file or []),
                   word_lists=tuple(args.word_list or []),
                   dictionary_size=args.dictionary_size,
                   lesson_length=args.lesson_length,
                   line_length=args.line_length,
                   min_word_length=args.min_word_length,
                   max_word_length=args.max_word_length,
                   text_distance=args.text_distance,
                   word_diversity=args.word_diversity,
                   summary_every=args.summary_every,
                   letters_only=args.letters_only,
                   seed=args.seed,
                   workers=args.workers,
                   course=course_data)

    def errors(self):
        result = []
        if self.lesson_length < 1:
            result.append(LESSON_LENGTH_ERROR)
        if self.line_length < 1:
            result.append(LINE_LENGTH_ERROR)
        return result

    def validate(self):
        # settings that only switch off a feature
        result = []
        if not 0.0 <= self.text_distance <= 1.0:
            result.append(TEXT_DISTANCE_WARNING)
        if self.word_diversity < 1:
            result.append(WORD_DIVERSITY_WARNING)
        if self.min_word_length > self.max_word_length:
            result.append(WORD_LENGTH_WARNING)
        if self.dictionary_size < 1:
            result.append(DICTIONARY_SIZE_WARNING)
        return result

    @property
    def uses_dictionary(self):
        return self.min_word_length <= self.max_word_length and self.dictionary_size >= 1
