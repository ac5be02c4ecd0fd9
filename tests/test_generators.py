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

import random

import pytest

from ktgen import generators
from ktgen.generators import Alternate, Repeat, Shuffle, Words, generate


@pytest.fixture
def rng():
    return random.Random(42)


def test_repeat():
    assert generators.repeat('abc', 7) == 'abcabca'
    assert generators.repeat('abc', 2) == 'ab'
    assert generators.repeat('abc', 0) == ''
    assert generators.repeat('', 5) == ''


def test_segment_and_stretch():
    assert generators.segment('aabbcc', 2) == 'aa bb cc'
    assert generators.segment('abcde', 2) == 'ab cd e'
    assert generators.segment('abc', 0) == ''
    assert generators.stretch('abc', 2) == 'aabbcc'


def test_join_repeat():
    assert generators.join_repeat(['fjf', 'jj'], 10) == 'fjf jj fjf jj'
    assert generators.join_repeat(['abc'], 5) == 'abc'
    assert generators.join_repeat(['abc', 'de'], 5) == 'abc de'
    assert generators.join_repeat(['abcdef'], 5) == ''
    assert generators.join_repeat([], 5) == ''
    assert generators.join_repeat(['ab'], 0) == ''


def test_generate_repeat(rng):
    assert generate(Repeat(2), 'fj', 6, rng) == 'fj fj fj'
    assert generate(Repeat(3), '[sch]', 6, rng) == 'sch sch'


def test_generate_alternate(rng):
    assert generate(Alternate(3), 'fj', 9, rng) == 'fff jjj fff'
    assert generate(Alternate(2), '{WW}', 6, rng) == '{{ }} {{'


def test_generate_shuffle(rng):
    text = generate(Shuffle(2), 'abcd', 8, rng)
    joined = text.replace(' ', '')

    assert len(joined) == 8
    assert sorted(joined[:4]) == ['a', 'b', 'c', 'd']
    assert joined[:4] == joined[4:]
    assert all(len(segment) <= 2 for segment in text.split(' '))


def test_generate_words(rng):
    assert generate(Words(), 'fj', 10, rng, words=['fjf', 'jj']) == 'fjf jj fjf jj'
    assert generate(Words(), 'fj', 10, rng) == ''


def test_generate_words_for_digits(rng):
    assert generate(Words(), '123', 10, rng, words=['ab']) == ''


def test_generate_words_with_ww(rng):
    assert generate(Words(), '(WW)', 8, rng, words=['ab']) == '(ab) (ab)'


def test_generate_words_with_punctuation_marks(rng):
    text = generate(Words(), ',', 20, rng, words=['ab', 'cd'])

    for word in text.split(' '):
        assert word.count(',') == 1
        assert word.strip(',') in ('ab', 'cd')


def test_random_pair(rng):
    assert generators.random_pair('(', ')', rng) == ('(', ')')
    assert generators.random_pair('', '.', rng) == ('', '.')
    assert generators.random_pair('"', '', rng) == ('"', '')
    assert generators.random_pair('', '', rng) == ('', '')


def test_generate_nothing(rng):
    assert generate(Repeat(2), 'fj', 0, rng) == ''
    assert generate(Shuffle(2), '', 4, rng) == ''


def test_generate_unknown_generator(rng):
    with pytest.raises(TypeError):
        generate(object(), 'fj', 4, rng)


def test_generate_repeat_single_segment(rng):
    assert generate(Repeat(10), 'ab', 10, rng) == 'ababababab'


def test_generate_words_whole_words(rng):
    text = generate(Words(), 'aeiou', 40, rng, words=['abc', 'are', 'you'])

    assert set(text.split(' ')) == {'abc', 'are', 'you'}


def test_rotate_words(rng):
    words = ['aa', 'bb', 'cc', 'dd']
    rotated = generators.rotate_words(words, rng)
    offset = rotated.index('aa')

    assert rotated[offset:] + rotated[:offset] == words
    assert generators.rotate_words([], rng) == []
    assert generators.rotate_words(['aa'], rng) == ['aa']


def test_generate_words_starts_at_a_new_word_each_call(rng):
    words = [letter * 2 for letter in 'abcdefghijklmnopqrstuvwxyz']
    first_words = {generate(Words(), 'a', 10, rng, words=words).split(' ')[0] for _ in range(8)}

    assert len(first_words) > 1
