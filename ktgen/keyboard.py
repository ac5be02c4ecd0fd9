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

# keyboard layouts: from key geometry to ordered pairs of opposing keys
#
# hand structure (for both hands, read from the little finger to the index finger):
#
#   hand[finger][level][key]
#
#   finger: 0 little, 1 ring, 2 middle, 3 index
#   level:  keyboard rows reachable by the finger, top down (usually four)
#   key:    keys of a row operated by the finger (usually one or two), ordered
#           from the home position outwards
#
# example with layout english (USA): the home row keys asdf (left) and ;lkj (right) are
#   hand[0][2][0], hand[1][2][0], hand[2][2][0], hand[3][2][0]

import collections
import enum
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Optional

from . import patterns

logger = logging.getLogger(__name__)

FINGER_COUNT = 8

# fingers whose keys are sorted by descending left coordinate within a level
RIGHT_TO_LEFT_FINGERS = (0, 1, 2, 4)

KEYBOARD_ERROR = 'Error on creating key-finger map from keyboard. Please provide a valid 8-finger keyboard KTouch export.'


class CharPosition(enum.Enum):
    DEFAULT = 'hidden'
    BOTTOM_LEFT = 'bottomLeft'
    TOP_LEFT = 'topLeft'
    BOTTOM_RIGHT = 'bottomRight'
    TOP_RIGHT = 'topRight'


POSITIONS = list(CharPosition)


@dataclass(frozen=True)
class Char:
    text: str = ''
    position: Optional[str] = None
    modifier: Optional[str] = None


@dataclass(frozen=True)
class Key:
    top: int = 0
    left: int = 0
    width: int = 0
    height: int = 0
    finger_index: int = 0
    chars: tuple = ()


@dataclass(frozen=True)
class KeyboardLayout:
    title: str = ''
    name: str = ''
    keys: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class KeyPair:
    left: Optional[Key] = None
    right: Optional[Key] = None
    finger: int = -1
    level: int = -1
    index: int = -1

    @property
    def coordinate(self):
        return self.finger, self.level, self.index

# hand model

def hands(keys):
    """Group keys into (left hand, right hand), or None without exactly 8 fingers."""
    keys = list(keys)

    if len({key.finger_index for key in keys}) != FINGER_COUNT:
        logger.error(KEYBOARD_ERROR)
        return None

    by_finger = collections.defaultdict(list)
    for key in keys:
        by_finger[key.finger_index].append(key)

    fingers = []
    for position, finger_index in enumerate(sorted(by_finger)):
        levels = collections.defaultdict(list)
        for key in sorted(by_finger[finger_index], key=attrgetter('top')):
            levels[key.top].append(key)

        right_to_left = position in RIGHT_TO_LEFT_FINGERS
        fingers.append([sorted(level, key=attrgetter('left'), reverse=right_to_left) for level in levels.values()])

    left_hand = fingers[:4]
    right_hand = fingers[4:][::-1]

    return left_hand, right_hand

# pairing of opposing fingers

def pair_keys(hands):
    if hands is None:
        return []

    left, right = hands
    result = []
    no_opponent = []

    for finger in range(4):
        for level in range(min(len(left[finger]), len(right[finger]))):
            left_keys = left[finger][level]
            right_keys = right[finger][level]

            for index, (left_key, right_key) in enumerate(zip(left_keys, right_keys)):
                result.append(KeyPair(left_key, right_key, finger, level, index))

            common = min(len(left_keys), len(right_keys))
            no_opponent.extend(left_keys[common:] or right_keys[common:])

    for i in range(0, len(no_opponent), 2):
        partner = no_opponent[i + 1] if i + 1 < len(no_opponent) else None
        result.append(KeyPair(no_opponent[i], partner))

    return result

# (finger, level, index) in the order they are taught, for example when using a QWERTY layout like 'english (USA)':
teaching_order = [
    (3, 2, 0), # fj
    (2, 2, 0), # dk
    (1, 2, 0), # sl
    (0, 2, 0), # a;
    (3, 2, 1), # gh
    (3, 1, 1), # ty
    (3, 3, 0), # vm
    (3, 3, 1), # bn
    (3, 1, 0), # ru
    (2, 1, 0), # ei
    (2, 3, 0), # c,
    (1, 1, 0), # wo
    (1, 3, 0), # x.
    (0, 1, 0), # qp
    (0, 3, 0), # z/
]

def custom_order(key_pairs):
    path = [pair for coordinate in teaching_order for pair in key_pairs if pair.coordinate == coordinate]
    taken = {id(pair) for pair in path}

    return path + [pair for pair in key_pairs if id(pair) not in taken]

# characters of key pairs

def char_at_position(key, position):
    return next((char for char in key.chars if char.position == position.value), None)

def map_chars_by_position(left_key, right_key, position, positions=POSITIONS):
    # only the right key is searched ahead (never backwards) for a partner character
    if position not in positions:
        return None

    left_char = char_at_position(left_key, position) if left_key is not None else None

    if right_key is not None:
        for right_position in positions[positions.index(position):]:
            right_char = char_at_position(right_key, right_position)
            if right_char is not None:
                return left_char, right_char

    return left_char, None

def is_allowed_symbol(character):
    return any(pattern.fullmatch(character) for pattern in (patterns.letters_pattern, patterns.digits_pattern, patterns.punctuation_pattern))

def only_allowed_symbols(symbols):
    stripped = (''.join(character for character in entry if is_allowed_symbol(character)) for entry in symbols)
    return [entry for entry in stripped if entry]

def without_duplicate_singles(symbols):
    pairs = [entry for entry in symbols if len(entry) == 2]
    return [entry for entry in symbols if len(entry) != 1 or not any(entry in pair for pair in pairs)]

def map_chars(key_pairs):
    result = []

    for position in POSITIONS:
        for pair in key_pairs:
            left_char, right_char = map_chars_by_position(pair.left, pair.right, position) or (None, None)
            joined = (left_char.text if left_char else '') + (right_char.text if right_char else '')
            if joined and joined not in result:
                result.append(joined)

    return without_duplicate_singles(only_allowed_symbols(result))

def filter_chars(key_pairs, pattern):
    result = []

    for pair in key_pairs:
        joined = ''
        for key in (pair.left, pair.right):
            if key is not None:
                joined += next((char.text for char in key.chars if pattern.fullmatch(char.text)), '')
        if joined:
            result.append(joined)

    return result

def lower_letters(key_pairs):
    return filter_chars(key_pairs, patterns.lower_letters_pattern)

def upper_letters(key_pairs):
    return filter_chars(key_pairs, patterns.upper_letters_pattern)

def to_lesson_specification(keyboard_layout, letters_only=False):
    ordered = custom_order(pair_keys(hands(keyboard_layout.keys)))

    if letters_only:
        return lower_letters(ordered) + upper_letters(ordered)

    return map_chars(ordered)

# reading KTouch keyboard layout exports

def xml_to_dict(element):
    return {e.tag: e.text for e in element.findall('*')}

def _int_attribute(element, name):
    try:
        return int(element.get(name, 0))
    except ValueError:
        return 0

def key_from_xml(element):
    chars = tuple(Char(text=char.text or '', position=char.get('position'), modifier=char.get('modifier')) for char in element.findall('char'))

    return Key(top=_int_attribute(element, 'top'),
               left=_int_attribute(element, 'left'),
               width=_int_attribute(element, 'width'),
               height=_int_attribute(element, 'height'),
               finger_index=_int_attribute(element, 'fingerIndex'),
               chars=chars)

def parse_keyboard_layout(text):
    text = text.strip()
    if not text:
        return None

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.error('Invalid keyboard layout: %s', e)
        return None

    if root.tag != 'keyboardLayout':
        return None

    info = xml_to_dict(root)
    keys_element = root.find('keys')
    keys = () if keys_element is None else tuple(key_from_xml(key) for key in keys_element.findall('key'))

    return KeyboardLayout(title=info.get('title') or '', name=info.get('name') or '', keys=keys)

def read_keyboard_layout(filename):
    try:
        with open(filename, encoding='utf-8') as file:
            text = file.read()
    except OSError as e:
        logger.error('%s (%s)', e, filename)
        return None

    return parse_keyboard_layout(text)
