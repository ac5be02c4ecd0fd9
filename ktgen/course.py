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

# courses: lesson specification input and KTouch course files

import logging
import os
import sys
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .keyboard import read_keyboard_layout, to_lesson_specification
from .lessons import Lesson

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Course:
    title: str = ''
    description: str = ''
    keyboard_layout: str = ''
    lessons: list = field(default_factory=list)

# reading lesson specifications

def parse_lesson_specification_text(text):
    return text.split() if text else []

def read_lesson_specification(source, letters_only=False):
    """Lesson specification from a keyboard layout export, a text file or the text itself."""
    if not os.path.isfile(source):
        return parse_lesson_specification_text(source)

    if source.lower().endswith('.xml'):
        keyboard_layout = read_keyboard_layout(source)
        if keyboard_layout is None:
            return []
        return to_lesson_specification(keyboard_layout, letters_only)

    try:
        with open(source, encoding='utf-8') as file:
            return parse_lesson_specification_text(file.read())
    except OSError as e:
        logger.error('%s (%s)', e, source)
        return []

# functions for reading/writing course files

def xml_to_dict(element):
    return {e.tag: e.text or '' for e in element.findall('*')}

def dict_to_xml(name, data, keys, parent=None):
    main_element = ET.Element(name) if parent is None else ET.SubElement(parent, name)

    for key in keys:
        element = ET.SubElement(main_element, key)
        element.text = data[key]

    return main_element

def new_id():
    return f'{{{uuid.uuid4()}}}'

def course_to_xml(course):
    data = {
        'id': new_id(),
        'title': course.title,
        'description': course.description,
        'keyboardLayout': course.keyboard_layout,
    }

    course_element = dict_to_xml('course', data, ['id', 'title', 'description', 'keyboardLayout'])
    lessons_element = ET.SubElement(course_element, 'lessons')

    for lesson in course.lessons:
        data = {
            'id': new_id(),
            'title': lesson.title,
            'newCharacters': lesson.new_characters,
            'text': lesson.text,
        }
        dict_to_xml('lesson', data, ['id', 'title', 'newCharacters', 'text'], lessons_element)

    ET.indent(course_element, space=" ")

    return course_element

def write_course(course, targets):
    course_element = course_to_xml(course)

    for target in targets:
        if target == 'stdout':
            sys.stdout.write(ET.tostring(course_element, encoding='utf-8', xml_declaration=True).decode('utf-8'))
            sys.stdout.write('\n')
        else:
            ET.ElementTree(course_element).write(target, encoding='utf-8', xml_declaration=True)
            logger.info('Course written to %s', target)

def read_course(filename):
    root = ET.parse(filename).getroot()
    info = xml_to_dict(root)

    lessons_element = root.find('lessons')
    lessons = [] if lessons_element is None else [xml_to_dict(lesson) for lesson in lessons_element.findall('lesson')]

    return Course(title=info.get('title', ''),
                  description=info.get('description', ''),
                  keyboard_layout=info.get('keyboardLayout', ''),
                  lessons=[Lesson(title=lesson.get('title', ''), new_characters=lesson.get('newCharacters', ''), text=lesson.get('text', '')) for lesson in lessons])
