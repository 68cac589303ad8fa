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

from pathlib import Path

import pytest

from protowire.conf.settings import CodecSettings
from protowire.registry import SchemaRegistry
from protowire.schema import FieldDescriptor, FieldKind, MessageDescriptor, SchemaError
from protowire_tests.unittest import ATTESTATION_SCHEMA_FILEPATH, TESTING_SCHEMA_FILEPATH


def test_from_yaml_with_extends():
    registry = SchemaRegistry.from_yaml(filepath=ATTESTATION_SCHEMA_FILEPATH)
    assert 'attestation.v1.Remote' in registry.messages
    assert 'attestation.v1.Status' in registry.enums
    commit = registry.get_message('attestation.v1.Commit')
    # relative names are resolved to full names
    assert commit.get_field('remotes').type_name == 'attestation.v1.Remote'
    assert commit.get_field('status').type_name == 'attestation.v1.Status'
    assert commit.get_field('parent').type_name == 'attestation.v1.Commit'
    assert commit.get_field('created_at').type_name == 'google.protobuf.Timestamp'


def test_well_known_types_are_always_registered():
    registry = SchemaRegistry()
    for name in ('Timestamp', 'Duration', 'Struct', 'Value', 'ListValue', 'BoolValue', 'Int64Value', 'BytesValue'):
        assert f'google.protobuf.{name}' in registry.messages
    assert 'google.protobuf.NullValue' in registry.enums


def test_scoped_name_resolution():
    registry = SchemaRegistry.from_dict({
        'package': 'a.b',
        'messages': {
            'Outer': {'fields': [{'name': 'inner', 'number': 1, 'kind': 'message', 'type_name': 'Outer.Inner'}]},
            'Outer.Inner': {'fields': [{'name': 'other', 'number': 1, 'kind': 'message', 'type_name': 'Other'}]},
            'Other': {'fields': [{'name': 'self', 'number': 1, 'kind': 'message', 'type_name': '.a.b.Other'}]},
        },
    })
    assert registry.get_message('a.b.Outer').fields[0].type_name == 'a.b.Outer.Inner'
    assert registry.get_message('a.b.Outer.Inner').fields[0].type_name == 'a.b.Other'
    assert registry.get_message('.a.b.Other').fields[0].type_name == 'a.b.Other'


def test_unknown_type_name():
    message = MessageDescriptor(name='M', fields=(
        FieldDescriptor(name='status', number=1, kind=FieldKind.ENUM, type_name='Missing'),
    ))
    with pytest.raises(SchemaError, match='unknown enum type Missing'):
        SchemaRegistry([message])


def test_enum_name_used_as_message():
    with pytest.raises(SchemaError):
        SchemaRegistry.from_dict({
            'enums': {'E': {'values': {'ZERO': 0}}},
            'messages': {'M': {'fields': [{'name': 'e', 'number': 1, 'kind': 'message', 'type_name': 'E'}]}},
        })


def test_duplicate_declarations():
    message = MessageDescriptor(name='google.protobuf.Timestamp')
    with pytest.raises(SchemaError):
        SchemaRegistry([message])


@pytest.mark.parametrize('data', [
    {'messages': {'M': {'fields': [{'name': 'a', 'number': 0, 'kind': 'int32'}]}}},
    {'messages': {'M': {'fields': [{'name': 'a', 'number': 1, 'kind': 'int32'}], 'options': {}}}},
    {'enums': {'E': {'values': {'ONE': 1}}}},
    {'services': {}},
])
def test_invalid_documents(data):
    with pytest.raises(SchemaError):
        SchemaRegistry.from_dict(data)


def test_unknown_messages_and_enums():
    registry = SchemaRegistry()
    with pytest.raises(SchemaError):
        registry.get_message('nope.Nope')
    with pytest.raises(SchemaError):
        registry.get_enum('nope.Nope')
    with pytest.raises(SchemaError):
        registry.codec('nope.Nope', CodecSettings())


def test_codec_shares_nested_codecs():
    registry = SchemaRegistry.from_yaml(filepath=ATTESTATION_SCHEMA_FILEPATH)
    codec = registry.codec('attestation.v1.Commit', CodecSettings())
    parent = codec.fields[7]
    assert parent.name == 'parent'
    assert parent.proto_type.codec is codec


def test_codec_uses_configured_settings(monkeypatch):
    monkeypatch.setenv('PROTOWIRE_CONFIG_YAML', str(Path(ATTESTATION_SCHEMA_FILEPATH).parent / 'base_settings.yml'))
    registry = SchemaRegistry.from_yaml(filepath=ATTESTATION_SCHEMA_FILEPATH)
    codec = registry.codec('attestation.v1.Commit')
    assert codec.settings.LONG_MODE == 'string'
    assert codec.default()['size'] == '0'


def test_from_yaml_files():
    registry = SchemaRegistry.from_yaml_files([ATTESTATION_SCHEMA_FILEPATH, TESTING_SCHEMA_FILEPATH])
    assert 'attestation.v1.Commit' in registry.messages
    assert 'testing.v1.Tree' in registry.messages
    assert 'testing.v1.Color' in registry.enums
    # nested codecs resolve across the whole registry
    codec = registry.codec('testing.v1.Choice')
    assert codec.decode(bytes.fromhex('2200'))['nested'] == registry.codec('testing.v1.Scalars').default()

    with pytest.raises(SchemaError):
        SchemaRegistry.from_yaml_files([ATTESTATION_SCHEMA_FILEPATH, ATTESTATION_SCHEMA_FILEPATH])
