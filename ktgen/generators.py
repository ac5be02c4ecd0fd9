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

# text generators: (symbols, number of symbols) -> practice text
#
# generators are plain values; generate() turns one into text for a lesson specification

import itertools
from dataclasses import dataclass

from . import patterns


@dataclass(frozen=True)
class Repeat:
    segment_length: int


@dataclass(frozen=True)
class Shuffle:
    segment_length: int


@dataclass(frozen=True)
class Alternate:
    segment_length: int


@dataclass(frozen=True)
class Words:
    pass

# string operations

def repeat(symbols, length):
    if length <= 0 or not symbols:
        return ''

    return (symbols * (length // len(symbols) + 1))[:length].strip()

def shuffle(symbols, rng):
    characters = list(symbols)
    rng.shuffle(characters)
    return ''.join(characters).strip()

def segment(text, length):
    if length < 1:
        return ''

    return ' '.join(text[i:i + length] for i in range(0, len(text), length)).strip()

def stretch(symbols, length):
    # "abc", 2 -> "aabbcc"
    return ''.join(character * max(length, 0) for character in symbols)

def rotate_words(words, rng):
    # same order, random first word
    words = list(words)
    if not words:
        return words

    offset = rng.randrange(max(len(words) - 1, 1))

    return words[offset:] + words[:offset]

def join_repeat(words, number_of_symbols):
    """Join words (repeating them) to at most number_of_symbols non-whitespace characters.

    Only whole words are used. When the next word does not fit any more, a word
    filling the remaining space exactly is taken if there is one.
    """
    if number_of_symbols <= 0:
        return ''

    candidates = [word.strip() for word in words]
    candidates = [word for word in candidates if 0 < len(word) <= number_of_symbols]

    if not candidates:
        return ''

    result = []
    count = 0

    for word in itertools.cycle(candidates):
        if count + len(word) > number_of_symbols:
            fill = next((candidate for candidate in candidates if len(candidate) == number_of_symbols - count), None)
            if fill is not None:
                result.append(fill)
            break

        result.append(word)
        count += len(word)

        if count == number_of_symbols:
            break

    return ' '.join(result)

# punctuation marks around words

pairs = {
    '(': ')',
    '[': ']',
    '{': '}',
    '<': '>',
    '"': '"',
    "'": "'",
    '`': '`',
}

reverse_pairs = {right: left for left, right in pairs.items()}

def random_pair(left, right, rng):
    if left and right:
        if rng.random() < 0.5:
            l = rng.choice(left)
            r = pairs[l] if l in pairs and pairs[l] in right else ''
        else:
            r = rng.choice(right)
            l = reverse_pairs[r] if r in reverse_pairs and reverse_pairs[r] in left else ''
        return l, r

    if right:
        return '', rng.choice(right)

    if left:
        return rng.choice(left), ''

    return '', ''

def add_punctuation_marks(words, marks, rng):
    if not marks:
        return list(words)

    result = []

    if patterns.is_ww(marks):
        left, right = patterns.split_ww(marks)
        for word in words:
            l, r = random_pair(left, right, rng)
            result.append(l + word + r)
    else:
        for word in words:
            mark = rng.choice(marks)
            result.append(word + mark if rng.random() < 0.5 else mark + word)

    return result

# dispatch

def generate(generator, symbols, number_of_symbols, rng, words=()):
    if number_of_symbols <= 0:
        return ''

    if isinstance(generator, Words):
        if patterns.are_digits(symbols):
            return ''
        marks = patterns.ww(symbols) or patterns.punctuation_marks(symbols)
        return join_repeat(add_punctuation_marks(rotate_words(words, rng), marks, rng), number_of_symbols)

    unpacked = patterns.unpack(symbols)

    if isinstance(generator, Repeat):
        return segment(repeat(unpacked, number_of_symbols), generator.segment_length)

    if isinstance(generator, Shuffle):
        return segment(repeat(shuffle(unpacked, rng), number_of_symbols), generator.segment_length)

    if isinstance(generator, Alternate):
        stretched = stretch(unpacked, generator.segment_length)
        return segment(repeat(stretched, number_of_symbols), generator.segment_length)

    raise TypeError(f'unknown text generator: {generator!r}')
