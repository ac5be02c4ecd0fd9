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

# lesson filters: (previous lesson or None, lesson) -> keep the lesson?

import numpy as np


def levenshtein_distance(a, b):
    if not a:
        return len(b)
    if not b:
        return len(a)

    columns = np.arange(len(b) + 1)
    previous = columns
    b_chars = np.array(list(b))

    for i, char in enumerate(a, 1):
        current = np.empty_like(previous)
        current[0] = i
        # deletion and substitution
        current[1:] = np.minimum(previous[1:] + 1, previous[:-1] + (b_chars != char))
        # insertion: current[j] = min over k <= j of current[k] + j - k
        previous = np.minimum.accumulate(current - columns) + columns

    return int(previous[-1])

def relative_levenshtein_distance(text, other):
    # 0 = equal, 1 = completely different
    if not text:
        return 0.0
    if not other:
        return 1.0

    return levenshtein_distance(text, other) / len(text)

def different_words(text, n):
    if n <= 0:
        return True
    if not text:
        return False

    words = text.split()
    if len(words) <= n:
        return True

    return len(set(words)) > n

def relative_levenshtein_distance_from_lesson_before(minimum_distance):
    def lesson_filter(previous_lesson, lesson):
        if not 0.0 <= minimum_distance <= 1.0:
            return True
        previous_text = previous_lesson.text if previous_lesson is not None else None
        return relative_levenshtein_distance(lesson.text, previous_text) > minimum_distance

    return lesson_filter

def lesson_contains_at_least_different_words(n):
    def lesson_filter(previous_lesson, lesson):
        return different_words(lesson.text, n)

    return lesson_filter
