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

import logging

from ktgen import keyboard
from ktgen.keyboard import Char, Key, KeyPair

ENGLISH_USA_CHARS = [
    "qp", "a;", "z/", "wo", "sl", "x.",
    "ei", "dk", "c,", "ru", "ty", "fj",
    "gh", "vm", "bn", "10", "`-", "29",
    "38", "47", "56", "=[", "]\\", "'",
    "!)", "~_", "QP", "A:", "Z?", "@(",
    "WO", "SL", "X>", "#*", "EI", "DK",
    "C<", "$&", "%^", "RU", "TY", "FJ",
    "GH", "VM", "BN", "+{", "}|", "\"",
]

ENGLISH_USA_LETTERS = [
    "fj", "dk", "sl", "a", "gh", "ty", "vm",
    "bn", "ru", "ei", "c", "wo", "x", "qp", "z",
    "FJ", "DK", "SL", "A", "GH", "TY", "VM",
    "BN", "RU", "EI", "C", "WO", "X", "QP", "Z",
]


def key(text, finger_index, left, top=0):
    return Key(top=top, left=left, width=80, height=80, finger_index=finger_index, chars=(Char(text=text),))


def texts(key_pair):
    return [char.text for k in (key_pair.left, key_pair.right) if k is not None for char in k.chars]


def home_row(*extra):
    keys = [key(text, finger, finger) for finger, text in enumerate('asdfjkl;')]
    return keys + list(extra)


def test_hands_single_level():
    left, right = keyboard.hands(home_row())

    assert len(left) == 4
    assert len(right) == 4
    assert [finger[0][0].chars[0].text for finger in left] == ['a', 's', 'd', 'f']
    assert [finger[0][0].chars[0].text for finger in right] == [';', 'l', 'k', 'j']


def test_hands_sorts_keys_from_home_position_outwards():
    keys = home_row(key('g', 3, 4), key('h', 4, 3), key('q', 0, -1))
    left, right = keyboard.hands(keys)

    assert [k.chars[0].text for k in left[3][0]] == ['f', 'g']
    assert [k.chars[0].text for k in right[3][0]] == ['j', 'h']
    assert [k.chars[0].text for k in left[0][0]] == ['a', 'q']


def test_hands_multiple_levels():
    keys = home_row(*(key(text, finger, finger, top=-100) for finger, text in enumerate('qwertuio')))
    left, right = keyboard.hands(keys)

    assert [level[0].chars[0].text for level in left[0]] == ['q', 'a']
    assert [level[0].chars[0].text for level in right[0]] == ['o', ';']


def test_hands_requires_eight_fingers(caplog):
    with caplog.at_level(logging.ERROR):
        assert keyboard.hands(home_row()[:7]) is None
        assert keyboard.hands(home_row(key('x', 8, 8))) is None
        assert keyboard.hands([]) is None

    assert keyboard.KEYBOARD_ERROR in caplog.text


def test_pair_keys():
    pairs = keyboard.pair_keys(keyboard.hands(home_row()))

    assert [texts(pair) for pair in pairs] == [['a', ';'], ['s', 'l'], ['d', 'k'], ['f', 'j']]
    assert pairs[3].coordinate == (3, 0, 0)


def test_pair_keys_without_opponent():
    pairs = keyboard.pair_keys(keyboard.hands(home_row(key('g', 3, 4))))

    assert texts(pairs[3]) == ['f', 'j']
    assert texts(pairs[4]) == ['g']
    assert pairs[4].right is None
    assert pairs[4].coordinate == (-1, -1, -1)


def test_pair_keys_without_hands():
    assert keyboard.pair_keys(None) == []


def test_custom_order_english_usa(english_usa):
    ordered = keyboard.custom_order(keyboard.pair_keys(keyboard.hands(english_usa.keys)))
    expected = ['fj', 'dk', 'sl', 'a;', 'gh', 'ty', 'vm', 'bn', 'ru', 'ei', 'c,', 'wo', 'x.', 'qp', 'z/']

    for pair, (left, right) in zip(ordered, expected):
        assert left in [char.text for char in pair.left.chars]
        assert right in [char.text for char in pair.right.chars]


def test_custom_order_keeps_unknown_pairs():
    pairs = [KeyPair(key('x', 0, 0), None), KeyPair(key('f', 3, 0), key('j', 4, 0), 3, 2, 0)]

    assert keyboard.custom_order(pairs) == [pairs[1], pairs[0]]
    assert keyboard.custom_order([]) == []


def test_map_chars_english_usa(english_usa):
    pairs = keyboard.pair_keys(keyboard.hands(english_usa.keys))

    assert keyboard.map_chars(pairs) == ENGLISH_USA_CHARS


def test_map_chars_by_position():
    left = Key(chars=(Char('1', 'bottomLeft'), Char('!', 'topLeft')))
    right = Key(chars=(Char(')', 'topLeft'),))

    left_char, right_char = keyboard.map_chars_by_position(left, right, keyboard.CharPosition.BOTTOM_LEFT)
    assert (left_char.text, right_char.text) == ('1', ')')

    left_char, right_char = keyboard.map_chars_by_position(left, None, keyboard.CharPosition.TOP_LEFT)
    assert (left_char.text, right_char) == ('!', None)

    assert keyboard.map_chars_by_position(left, right, keyboard.CharPosition.TOP_LEFT, positions=[]) is None


def test_without_duplicate_singles():
    assert keyboard.without_duplicate_singles(['ab', 'bc', 'de', 'b']) == ['ab', 'bc', 'de']
    assert keyboard.without_duplicate_singles(['ab', 'bc', 'de', 'b', 'b']) == ['ab', 'bc', 'de']
    assert keyboard.without_duplicate_singles(['ab', 'x']) == ['ab', 'x']
    assert keyboard.without_duplicate_singles([]) == []


def test_only_allowed_symbols():
    assert keyboard.only_allowed_symbols(['ab', 'bc', 'de', '12']) == ['ab', 'bc', 'de', '12']
    assert keyboard.only_allowed_symbols(['ab', 'bc', '.', '⇥', 'b', '⇲']) == ['ab', 'bc', '.', 'b']
    assert keyboard.only_allowed_symbols(['⇡', '↲']) == []


def test_letters_english_usa(english_usa):
    pairs = keyboard.pair_keys(keyboard.hands(english_usa.keys))

    assert all(keyboard.patterns.lower_letters_pattern.fullmatch(entry) for entry in keyboard.lower_letters(pairs))
    assert all(keyboard.patterns.upper_letters_pattern.fullmatch(entry) for entry in keyboard.upper_letters(pairs))
    assert keyboard.lower_letters([]) == []


def test_to_lesson_specification(english_usa):
    assert keyboard.to_lesson_specification(english_usa, letters_only=True) == ENGLISH_USA_LETTERS

    specification = keyboard.to_lesson_specification(english_usa)
    assert sorted(specification) == sorted(ENGLISH_USA_CHARS)
    assert specification[:4] == ['fj', 'dk', 'sl', 'a;']


def test_read_keyboard_layout(english_usa):
    assert english_usa.title == 'English (USA)'
    assert english_usa.name == 'us'
    assert len(english_usa.keys) == 47

    a = next(k for k in english_usa.keys if Char('a', 'hidden') in k.chars)
    assert (a.top, a.left, a.finger_index) == (200, 180, 0)


def test_parse_keyboard_layout_errors(tmp_path, caplog):
    assert keyboard.parse_keyboard_layout('') is None
    assert keyboard.parse_keyboard_layout('<course/>') is None

    with caplog.at_level(logging.ERROR):
        assert keyboard.parse_keyboard_layout('<keyboardLayout>') is None
        assert keyboard.read_keyboard_layout(str(tmp_path / 'missing.xml')) is None


def test_models_without_optional_values():
    assert Char('a').position is None
    assert Char('a').modifier is None
    assert KeyPair().left is None
    assert KeyPair().right is None
