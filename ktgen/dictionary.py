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

# dictionary: words used for the text of word lessons
#
# continuous text (any text file) and frequency word lists (tab separated "word<TAB>count", e.g. the
# corpora from https://wortschatz.uni-leipzig.de/de/download) can be combined

import logging
import re

import numpy as np
import pandas as pd

from . import patterns

logger = logging.getLogger(__name__)

word_separator_pattern = re.compile(f'\\s+|[{patterns.punctuation}]+')

# reading words

def read_text(filename):
    try:
        with open(filename, encoding='utf-8') as file:
            return file.read().strip()
    except OSError as e:
        logger.error('%s (%s)', e, filename)
        return None

def filter_words(words, min_word_length, max_word_length):
    if min_word_length > max_word_length or max_word_length <= 0 or words.empty:
        return words.iloc[0:0]

    lengths = words.str.len()

    return words[words.str.fullmatch(patterns.letters_pattern.pattern) & lengths.between(max(min_word_length, 0), max_word_length)]

def extract_words(text, min_word_length, max_word_length):
    if not text:
        return []

    words = pd.Series(word_separator_pattern.split(text), dtype=str)

    return filter_words(words, min_word_length, max_word_length).tolist()

def read_word_list(filename, min_count=0):
    try:
        df = pd.read_csv(filename, sep='\t', names=['text', 'count'], quoting=3, na_filter=False, dtype={'text': str, 'count': np.int32})
    except (OSError, ValueError) as e:
        logger.error('%s (%s)', e, filename)
        return pd.Series([], dtype=str)

    if min_count > 0:
        df = df[df['count'] >= min_count]

    df = df.sort_values('count', ascending=False, ignore_index=True, kind='stable')

    return df['text']

def build_dictionary(text_files=(), word_lists=(), min_word_length=2, max_word_length=100, dictionary_size=4000, min_count=0):
    if dictionary_size <= 0:
        return []

    words = []

    for filename in text_files:
        words.extend(extract_words(read_text(filename), min_word_length, max_word_length))

    for filename in word_lists:
        words.extend(filter_words(read_word_list(filename, min_count), min_word_length, max_word_length).tolist())

    logger.debug('dictionary with %d of %d words', min(len(words), dictionary_size), len(words))

    return words[:dictionary_size]

# word selection per lesson

def prepare_dictionary(words):
    if isinstance(words, pd.DataFrame):
        return words

    df = pd.DataFrame({'text': pd.Series(list(words), dtype=str)})
    df = df[df['text'].str.len() > 0].reset_index(drop=True)

    df['characters'] = df['text'].map(frozenset)
    df['length'] = df['text'].str.len()

    return df

def history_letters(symbols):
    # letters of all specifications so far, including those of letter groups
    return frozenset(''.join(patterns.letters_pattern.findall(patterns.ww_pattern.sub('', symbols))))

def lesson_words(dictionary, history, symbols):
    """Words for a lesson teaching ``symbols`` after ``history`` was taught.

    Every word consists of history letters only. Letter groups have to be
    contained as a whole, otherwise at least one letter of the lesson is
    required (if it has letters at all). The dictionary order is kept.
    """
    kind = patterns.classify(symbols)

    if dictionary.empty or kind is patterns.SpecKind.DIGITS:
        return []

    known = history_letters(history + symbols)
    mask = dictionary['characters'].map(known.issuperset)

    if kind is patterns.SpecKind.LETTER_GROUP:
        mask &= dictionary['text'].str.contains(patterns.letter_group_letters(symbols), regex=False)
    elif patterns.contains_letters(symbols):
        lesson_letters = frozenset(patterns.letters(symbols))
        mask &= dictionary['characters'].map(lambda characters: not characters.isdisjoint(lesson_letters))

    return dictionary.loc[mask, 'text'].tolist()
