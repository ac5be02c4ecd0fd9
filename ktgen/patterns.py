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

# parsing of lesson specifications (symbol specs)
#
# a lesson specification is a single whitespace free token, for example:
#   fj         - plain symbols
#   123        - digits (never used for word lessons)
#   [sch]      - a letter group, words have to contain the group as a whole
#   (WW)  "WW" - punctuation marks wrapped around words (left and right of WW)
#   ,.         - punctuation marks randomly prefixed or appended to words

import enum
import re
import string

lower_letters = 'a-züäöß'
upper_letters = 'A-ZÜÄÖẞ'

# \p{Punct}, i.e. ASCII punctuation only
punctuation = re.escape(string.punctuation)

lower_letters_pattern = re.compile(f'[{lower_letters}]+')
upper_letters_pattern = re.compile(f'[{upper_letters}]+')
letters_pattern = re.compile(f'[{lower_letters}{upper_letters}]+')
digits_pattern = re.compile('[0-9]+')
punctuation_pattern = re.compile(f'[{punctuation}]+')
ww_pattern = re.compile(f'[{punctuation}]*WW[{punctuation}]*')
letter_group_pattern = re.compile(f'\\[[{lower_letters}{upper_letters}]+\\]')

WW = 'WW'


class SpecKind(enum.Enum):
    LITERAL = 'literal'
    DIGITS = 'digits'
    LETTER_GROUP = 'letter group'
    WW = 'ww'


def ww(symbols):
    match = ww_pattern.search(symbols)
    return match.group() if match else ''

def is_ww(symbols):
    return ww_pattern.fullmatch(symbols) is not None

def split_ww(marks):
    left, _, right = marks.partition(WW)
    return left, right

def _without_ww(symbols):
    part = ww(symbols)
    return symbols.replace(part, '') if part else symbols

def letter_group(symbols):
    match = letter_group_pattern.search(_without_ww(symbols))
    return match.group() if match else ''

def is_letter_group(symbols):
    return letter_group(symbols) != ''

def letter_group_letters(symbols):
    return letter_group(symbols)[1:-1]

def letters(symbols):
    stripped = letter_group_pattern.sub('', ww_pattern.sub('', symbols))
    return ''.join(letters_pattern.findall(stripped))

def contains_letters(symbols):
    return letters(symbols) != ''

def digits(symbols):
    return ''.join(digits_pattern.findall(symbols))

def are_digits(symbols):
    return digits_pattern.fullmatch(symbols) is not None

def punctuation_marks(symbols):
    stripped = _without_ww(symbols)
    group = letter_group(symbols)
    if group:
        stripped = stripped.replace(group, '')
    return ''.join(punctuation_pattern.findall(stripped))

def classify(symbols):
    if are_digits(symbols):
        return SpecKind.DIGITS
    if is_letter_group(symbols):
        return SpecKind.LETTER_GROUP
    if ww(symbols):
        return SpecKind.WW
    return SpecKind.LITERAL

def unpack(symbols):
    """Return the bare characters a specification teaches.

    WW markers and the brackets of a letter group are removed, everything else
    is kept in order: ``unpack('{WW}') == '{}'``, ``unpack('[sch]') == 'sch'``.
    """
    symbols = symbols.replace(WW, '')
    return letter_group_pattern.sub(lambda match: match.group()[1:-1], symbols)
