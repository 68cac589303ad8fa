# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import pytest
from pydantic import ValidationError

from protowire.schema import EnumDescriptor, FieldDescriptor, FieldKind, Label, MessageDescriptor, to_json_name
from protowire.serialization.encoding.tag import WireType


@pytest.mark.parametrize('name, json_name', [
    ('hash', 'hash'),
    ('author_email', 'authorEmail'),
    ('a_b_c', 'aBC'),
    ('trailing_', 'trailing'),
])
def test_to_json_name(name, json_name):
    assert to_json_name(name) == json_name


def test_field_descriptor_defaults():
    field = FieldDescriptor(name='author_email', number=2, kind=FieldKind.STRING)
    assert field.json_name == 'authorEmail'
    assert field.label is Label.SINGULAR
    assert not field.has_presence()
    assert not field.is_packed()

    explicit = FieldDescriptor(name='author_email', number=2, kind='string', json_name='email')
    assert explicit.json_name == 'email'
    assert explicit.kind is FieldKind.STRING


def test_presence():
    assert FieldDescriptor(name='a', number=1, kind='int32', label='optional').has_presence()
    assert FieldDescriptor(name='a', number=1, kind='int32', oneof='choice').has_presence()
    assert FieldDescriptor(name='a', number=1, kind='message', type_name='M').has_presence()
    assert not FieldDescriptor(name='a', number=1, kind='message', type_name='M', label='repeated').has_presence()


def test_packed():
    assert FieldDescriptor(name='a', number=1, kind='sint64', label='repeated').is_packed()
    assert not FieldDescriptor(name='a', number=1, kind='sint64', label='repeated', packed=False).is_packed()
    assert not FieldDescriptor(name='a', number=1, kind='string', label='repeated').is_packed()


def test_map_descriptor():
    field = FieldDescriptor(name='labels', number=7, kind='map', key_kind='int32', value_kind='enum', type_name='E')
    assert field.is_map()
    assert field.element_kind is FieldKind.ENUM


@pytest.mark.parametrize('kwargs', [
    dict(name='a', number=0, kind='int32'),
    dict(name='a', number=2**29, kind='int32'),
    dict(name='a', number=19500, kind='int32'),
    dict(name='not valid', number=1, kind='int32'),
    dict(name='a', number=1, kind='int128'),
    dict(name='a', number=1, kind='message'),
    dict(name='a', number=1, kind='int32', type_name='Foo'),
    dict(name='a', number=1, kind='map', key_kind='string'),
    dict(name='a', number=1, kind='map', key_kind='double', value_kind='string'),
    dict(name='a', number=1, kind='map', key_kind='string', value_kind='map'),
    dict(name='a', number=1, kind='map', key_kind='string', value_kind='string', label='repeated'),
    dict(name='a', number=1, kind='string', key_kind='string'),
    dict(name='a', number=1, kind='string', label='repeated', oneof='choice'),
    dict(name='a', number=1, kind='string', unknown_option=True),
])
def test_invalid_field_descriptors(kwargs):
    with pytest.raises(ValidationError):
        FieldDescriptor(**kwargs)


def test_field_descriptors_are_frozen():
    field = FieldDescriptor(name='a', number=1, kind='int32')
    with pytest.raises(ValidationError):
        field.number = 2


def test_message_descriptor():
    message = MessageDescriptor(name='attestation.v1.Commit', fields=(
        FieldDescriptor(name='hash', number=1, kind='string'),
        FieldDescriptor(name='sha1', number=2, kind='string', oneof='digest'),
        FieldDescriptor(name='sha256', number=3, kind='bytes', oneof='digest'),
    ))
    assert message.package == 'attestation.v1'
    assert message.get_field('hash') is message.fields[0]
    assert message.get_field_by_number(3) is message.fields[2]
    assert message.get_field('missing') is None
    assert message.oneofs() == {'digest': message.fields[1:]}


@pytest.mark.parametrize('fields', [
    (dict(name='a', number=1, kind='int32'), dict(name='b', number=1, kind='int32')),
    (dict(name='a', number=1, kind='int32'), dict(name='a', number=2, kind='int32')),
    (dict(name='a_b', number=1, kind='int32'), dict(name='aB', number=2, kind='int32')),
    (dict(name='a', number=1, kind='int32', oneof='b'), dict(name='b', number=2, kind='int32')),
])
def test_invalid_message_descriptors(fields):
    with pytest.raises(ValidationError):
        MessageDescriptor(name='M', fields=fields)


def test_enum_descriptor():
    enum = EnumDescriptor(name='pkg.Color', values={'RED': 0, 'CRIMSON': 0, 'GREEN': 1})
    enum_class = enum.enum_class
    assert enum_class.__name__ == 'Color'
    assert enum_class(0) is enum_class.RED
    assert enum_class.CRIMSON is enum_class.RED
    assert enum_class.UNRECOGNIZED == -1
    assert EnumDescriptor(name='pkg.Color', values={'RED': 0, 'CRIMSON': 0, 'GREEN': 1}).enum_class is enum_class


@pytest.mark.parametrize('values', [
    {'ONE': 1},
    {'ZERO': 0, 'UNRECOGNIZED': 5},
    {'ZERO': 0, 'MINUS_ONE': -1},
    {'ZERO': 0, 'HUGE': 2**31},
    {'ZERO': 0, 'not-valid': 1},
])
def test_invalid_enum_descriptors(values):
    with pytest.raises(ValidationError):
        EnumDescriptor(name='E', values=values)


def test_kind_wire_types():
    assert FieldKind.SINT64.wire_type() is WireType.VARINT
    assert FieldKind.SFIXED32.wire_type() is WireType.I32
    assert FieldKind.DOUBLE.wire_type() is WireType.I64
    assert FieldKind.ENUM.is_packable()
    assert not FieldKind.BYTES.is_packable()
    assert FieldKind.FIXED64.is_64_bit()
    assert not FieldKind.FLOAT.is_integral()
