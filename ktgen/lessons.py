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

# lesson building
#
# 1. drafts: one per lesson template and lesson specification, plus summary drafts every n specifications
# 2. text generation: drafts are turned into prototypes concurrently (drafts without text are dropped)
# 3. sequential passes over the sorted prototypes: new characters, filters, enumeration

import enum
import functools
import logging
import random
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace

from . import patterns
from .dictionary import lesson_words, prepare_dictionary
from .generators import Alternate, Repeat, Shuffle, Words, generate

logger = logging.getLogger(__name__)


class LessonKind(enum.IntEnum):
    # regular lessons come before summaries at the same position
    REGULAR = 0
    SUMMARY = 1


@dataclass(frozen=True)
class Lesson:
    title: str = ''
    new_characters: str = ''
    text: str = ''


@dataclass(frozen=True)
class LessonTemplate:
    title: str
    generators: tuple


@dataclass(frozen=True)
class LessonDraft:
    position: int
    kind: LessonKind
    title: str
    symbols: str
    history: str
    generators: tuple


@dataclass(frozen=True)
class LessonPrototype:
    position: int
    kind: LessonKind
    symbols: str
    title: str
    lesson: Lesson

    @property
    def sort_key(self):
        return self.position, self.kind


# lessons created for every lesson specification
default_recipe = (
    LessonTemplate('{symbols}', (Alternate(3), Repeat(2), Shuffle(4), Repeat(3), Alternate(3))),
    LessonTemplate('{symbols} + Text', (Words(), Shuffle(2), Words(), Words(), Shuffle(2), Words())),
    LessonTemplate('Text {symbols}', (Words(),)),
)

# lessons created every n lesson specifications
default_summary_recipe = (
    LessonTemplate('Summary {symbols}', (Shuffle(4), Alternate(2), Shuffle(3))),
    LessonTemplate('Summary Text {symbols}', (Words(),)),
)

# text assembly

whitespace_pattern = re.compile(r'\s+')

def symbols_count(text):
    return sum(1 for character in text if not character.isspace())

def normalize_whitespaces(text):
    return whitespace_pattern.sub(' ', text)

def symbols_per_generator(symbols_per_lesson, number_of_generators):
    if symbols_per_lesson <= 0 or number_of_generators <= 0:
        return 0
    if symbols_per_lesson < number_of_generators:
        return symbols_per_lesson
    return symbols_per_lesson // number_of_generators

def invoke_concat(text_generators, symbols_per_generator, symbols_total):
    """Concatenate generator results until there are symbols_total non-whitespace characters.

    The generators are invoked again from the first one as long as characters
    are missing. A single empty result makes the whole text empty.
    """
    if symbols_per_generator <= 0 or symbols_total <= 0 or not text_generators:
        return ''

    text = []
    count = 0

    while count < symbols_total:
        for text_generator in text_generators:
            result = text_generator(symbols_per_generator)
            if not result:
                return ''

            for character in result:
                text.append(character)
                if not character.isspace():
                    count += 1
                if count >= symbols_total:
                    return ''.join(text).strip()

            text.append(' ')

    return ''.join(text).strip()

def cut_position(text, line_length):
    # whitespace nearest to line_length, looking at line_length itself first, then left before right
    if len(text) <= line_length:
        return len(text)

    for distance in range(max(line_length, len(text) - line_length) + 1):
        for position in sorted({line_length - distance, line_length + distance}):
            if 0 < position < len(text) and text[position].isspace():
                return position

    return len(text)

def to_text_block(text, symbols_total, line_length):
    if not text or symbols_total <= 0 or line_length <= 0:
        return ''

    if len(text) < line_length:
        return text

    if line_length > symbols_total:
        result = []
        count = 0
        for character in text:
            result.append(character)
            if not character.isspace():
                count += 1
            if count == symbols_total:
                break
        return ''.join(result).strip()

    bound = min(symbols_total, symbols_count(text))
    remaining = normalize_whitespaces(text).strip()
    lines = []
    count = 0

    while count < bound and remaining:
        position = cut_position(remaining, line_length)
        line = remaining[:position].strip()
        lines.append(line)
        count += symbols_count(line)
        remaining = remaining[position:].strip()

    block = '\n'.join(lines)
    excess = count - symbols_total

    while excess > 0:
        if not block[-1].isspace():
            excess -= 1
        block = block[:-1]

    return block.strip()

# drafts

def lesson_drafts(lesson_specifications, recipe=default_recipe):
    lesson_specifications = list(lesson_specifications)
    drafts = []

    for index, symbols in enumerate(lesson_specifications):
        history = ''.join(lesson_specifications[:index])
        for template in recipe:
            title = template.title.format(symbols=patterns.unpack(symbols))
            drafts.append(LessonDraft(index, LessonKind.REGULAR, title, symbols, history, template.generators))

    return drafts

def summary_drafts(lesson_specifications, every, recipe=default_summary_recipe):
    if every <= 0:
        return []

    lesson_specifications = list(lesson_specifications)
    drafts = []

    for index in range(every - 1, len(lesson_specifications), every):
        group = lesson_specifications[index - every + 1:index + 1]
        symbols = ''.join(group)
        history = ''.join(lesson_specifications[:index])
        for template in recipe:
            title = template.title.format(symbols=''.join(patterns.unpack(s) for s in group))
            drafts.append(LessonDraft(index, LessonKind.SUMMARY, title, symbols, history, template.generators))

    return drafts

# text generation

def calculate_lesson_text(draft, dictionary, line_length, symbols_per_lesson, rng):
    if not draft.generators or line_length <= 0 or symbols_per_lesson <= 0:
        return ''

    words = []
    if any(isinstance(generator, Words) for generator in draft.generators):
        words = lesson_words(dictionary, draft.history, draft.symbols)

    text_generators = [functools.partial(generate, generator, draft.symbols, rng=rng, words=words) for generator in draft.generators]

    single_line = invoke_concat(text_generators, symbols_per_generator(symbols_per_lesson, len(text_generators)), symbols_per_lesson)
    if not single_line:
        return ''

    return to_text_block(single_line, symbols_per_lesson, line_length)

def create_lesson_prototypes(drafts, dictionary, line_length, symbols_per_lesson, rng=None, max_workers=None):
    if line_length <= 0 or symbols_per_lesson <= 0 or not drafts:
        return []

    rng = rng or random.Random()
    dictionary = prepare_dictionary(dictionary)

    # one generator per task, drawn in draft order
    task_rngs = [random.Random(rng.getrandbits(64)) for _ in drafts]

    def task(draft, task_rng):
        return calculate_lesson_text(draft, dictionary, line_length, symbols_per_lesson, task_rng)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        texts = list(executor.map(task, drafts, task_rngs))

    prototypes = []

    for draft, text in zip(drafts, texts):
        if not text:
            logger.debug('Dropping lesson "%s": no text', draft.title)
            continue
        prototypes.append(LessonPrototype(draft.position, draft.kind, draft.symbols, draft.title, Lesson(title=draft.title, text=text)))

    return prototypes

# sequential passes

def sort_prototypes(prototypes):
    return sorted(prototypes, key=lambda prototype: prototype.sort_key)

def new_characters(history, symbols):
    new = ''.join(dict.fromkeys(character for character in patterns.unpack(symbols) if character not in history))
    return history + new, new

def set_new_characters(prototypes):
    history = ''
    result = []

    for prototype in prototypes:
        history, new = new_characters(history, prototype.symbols)
        result.append(replace(prototype, lesson=replace(prototype.lesson, new_characters=new)))

    return result

def filter_prototypes(prototypes, lesson_filters=()):
    result = []

    for i, prototype in enumerate(prototypes):
        previous = prototypes[i - 1].lesson if i > 0 else None
        introduces_new_characters = prototype.lesson.new_characters != ''
        is_summary = prototype.kind is LessonKind.SUMMARY

        if introduces_new_characters or is_summary or all(lesson_filter(previous, prototype.lesson) for lesson_filter in lesson_filters):
            result.append(prototype)
        else:
            logger.debug('Filtered lesson "%s"', prototype.title)

    return result

def enumerate_prototypes(prototypes):
    return [replace(prototype, lesson=replace(prototype.lesson, title=f'{number}: {prototype.title}'))
            for number, prototype in enumerate(prototypes, 1)]

def build_lessons(lesson_specifications, dictionary=(), line_length=50, symbols_per_lesson=300,
                  recipe=default_recipe, summary_every=0, summary_recipe=default_summary_recipe,
                  lesson_filters=(), rng=None, max_workers=None):
    lesson_specifications = [symbols for symbols in lesson_specifications if symbols]

    if not lesson_specifications or line_length <= 0 or symbols_per_lesson <= 0:
        return []

    drafts = lesson_drafts(lesson_specifications, recipe) + summary_drafts(lesson_specifications, summary_every, summary_recipe)

    prototypes = create_lesson_prototypes(drafts, dictionary, line_length, symbols_per_lesson, rng, max_workers)

    annotated = set_new_characters(sort_prototypes(prototypes))
    filtered = filter_prototypes(annotated, lesson_filters)
    enumerated = enumerate_prototypes(filtered)

    logger.info('Created %d lessons from %d lesson specifications', len(enumerated), len(lesson_specifications))

    return [prototype.lesson for prototype in enumerated]
