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

"""
The schema registry, which holds every known message and enum descriptor and builds codecs for them.

The well-known types (Timestamp, Duration, Struct, Value, ListValue and NullValue) are always registered.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional, Union

from pydantic import ValidationError
from structlog import get_logger

from protowire.codec import MessageCodec
from protowire.conf.get_settings import get_settings
from protowire.conf.settings import CodecSettings
from protowire.fields import Field, MapField, PresenceField, RepeatedField, SingularField
from protowire.proto_types import EnumType, MessageType, ProtoType, WellKnownType, make_scalar_type
from protowire.schema.descriptors import EnumDescriptor, FieldDescriptor, MessageDescriptor
from protowire.schema.document import SchemaDocument
from protowire.schema.exceptions import SchemaError
from protowire.schema.field_kind import FieldKind
from protowire.utils.yaml import dict_from_extended_yaml
from protowire.well_known import WELL_KNOWN_ADAPTERS, WELL_KNOWN_ENUMS, WELL_KNOWN_MESSAGES

logger = get_logger()


class SchemaRegistry:
    __slots__ = ('_messages', '_enums', 'log')

    def __init__(
        self,
        messages: Iterable[MessageDescriptor] = (),
        enums: Iterable[EnumDescriptor] = (),
    ) -> None:
        self.log = logger.new()
        self._enums: dict[str, EnumDescriptor] = {}
        for enum in (*WELL_KNOWN_ENUMS, *enums):
            if enum.name in self._enums:
                raise SchemaError(f'enum {enum.name} is declared twice')
            self._enums[enum.name] = enum
        declared: dict[str, MessageDescriptor] = {}
        for message in (*WELL_KNOWN_MESSAGES, *messages):
            if message.name in declared or message.name in self._enums:
                raise SchemaError(f'type {message.name} is declared twice')
            declared[message.name] = message
        self._messages: dict[str, MessageDescriptor] = {}
        for message in declared.values():
            self._messages[message.name] = self._resolve_message(message, declared)

    @property
    def messages(self) -> Mapping[str, MessageDescriptor]:
        return MappingProxyType(self._messages)

    @property
    def enums(self) -> Mapping[str, EnumDescriptor]:
        return MappingProxyType(self._enums)

    def get_message(self, name: str) -> MessageDescriptor:
        try:
            return self._messages[name.lstrip('.')]
        except KeyError:
            raise SchemaError(f'unknown message: {name}') from None

    def get_enum(self, name: str) -> EnumDescriptor:
        try:
            return self._enums[name.lstrip('.')]
        except KeyError:
            raise SchemaError(f'unknown enum: {name}') from None

    def codec(self, name: str, settings: Optional[CodecSettings] = None) -> MessageCodec:
        """ Build the codec of a message, and lazily of every message it refers to.

        Codecs built by the same call share the nested codecs, each call builds a new set since the settings of
        every nested codec must match. Without explicit settings the ones from `get_settings()` are used.
        """
        builder = _CodecBuilder(self, settings or get_settings())
        return builder.get(self.get_message(name).name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchemaRegistry:
        """ Build a registry from a schema document, see `protowire.schema.document`.
        """
        return cls.from_dicts([data])

    @classmethod
    def from_dicts(cls, documents: Iterable[dict[str, Any]]) -> SchemaRegistry:
        """ Build a registry from several schema documents, usually one per package.
        """
        messages: list[MessageDescriptor] = []
        enums: list[EnumDescriptor] = []
        for data in documents:
            try:
                document = SchemaDocument.model_validate(data)
                messages.extend(document.message_descriptors())
                enums.extend(document.enum_descriptors())
            except ValidationError as e:
                raise SchemaError(f'invalid schema document: {e}') from e
        return cls(messages, enums)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> SchemaRegistry:
        return cls.from_yaml_files([filepath])

    @classmethod
    def from_yaml_files(cls, filepaths: Iterable[Union[Path, str]]) -> SchemaRegistry:
        """ Build a registry from schema documents in YAML files, each file can extend another one.
        """
        documents = []
        for filepath in filepaths:
            data = dict_from_extended_yaml(filepath=filepath)
            logger.info('schema loaded', path=str(filepath), messages=len(data.get('messages') or {}),
                        enums=len(data.get('enums') or {}))
            documents.append(data)
        return cls.from_dicts(documents)

    def _resolve_message(self, message: MessageDescriptor, declared: Mapping[str, Any]) -> MessageDescriptor:
        fields: list[FieldDescriptor] = []
        for field in message.fields:
            if field.type_name is None:
                fields.append(field)
                continue
            table: Mapping[str, Any] = self._enums if field.element_kind is FieldKind.ENUM else declared
            resolved = _resolve_type_name(field.type_name, message.name, table)
            if resolved is None:
                kind = field.element_kind.value
                raise SchemaError(f'{message.name}.{field.name}: unknown {kind} type {field.type_name}')
            fields.append(field.model_copy(update={'type_name': resolved}))
        return message.model_copy(update={'fields': tuple(fields)})


def _resolve_type_name(type_name: str, scope: str, table: Mapping[str, Any]) -> str | None:
    """ Find the full name a type name refers to from inside the message `scope`.

    Like protoc, names are looked up from the innermost scope outwards, a leading dot makes the name absolute.

    >>> table = {'a.b.Remote': 1, 'Remote': 2, 'a.Other': 3}
    >>> _resolve_type_name('Remote', 'a.b.Commit', table)
    'a.b.Remote'
    >>> _resolve_type_name('.Remote', 'a.b.Commit', table)
    'Remote'
    >>> _resolve_type_name('Other', 'a.b.Commit', table)
    'a.Other'
    >>> _resolve_type_name('Missing', 'a.b.Commit', table) is None
    True
    """
    if type_name.startswith('.'):
        name = type_name[1:]
        return name if name in table else None
    parts = scope.split('.')
    for i in range(len(parts), -1, -1):
        prefix = '.'.join(parts[:i])
        candidate = f'{prefix}.{type_name}' if prefix else type_name
        if candidate in table:
            return candidate
    return None


class _CodecBuilder:
    """Builds the codecs of one `SchemaRegistry.codec()` call, one codec per message."""

    __slots__ = ('registry', 'settings', '_codecs')

    def __init__(self, registry: SchemaRegistry, settings: CodecSettings) -> None:
        self.registry = registry
        self.settings = settings
        self._codecs: dict[str, MessageCodec] = {}

    def get(self, name: str) -> MessageCodec:
        codec = self._codecs.get(name)
        if codec is None:
            descriptor = self.registry.get_message(name)
            fields = [self._make_field(field) for field in descriptor.fields]
            codec = MessageCodec(descriptor, fields, settings=self.settings)
            self._codecs[name] = codec
        return codec

    def _make_field(self, descriptor: FieldDescriptor) -> Field:
        if descriptor.is_map():
            assert descriptor.key_kind is not None and descriptor.value_kind is not None
            key_type = self._make_type(descriptor.key_kind, None)
            value_type = self._make_type(descriptor.value_kind, descriptor.type_name)
            return MapField(descriptor, key_type, value_type)
        proto_type = self._make_type(descriptor.kind, descriptor.type_name)
        if descriptor.is_repeated():
            return RepeatedField(descriptor, proto_type)
        if descriptor.has_presence():
            return PresenceField(descriptor, proto_type)
        return SingularField(descriptor, proto_type)

    def _make_type(self, kind: FieldKind, type_name: Optional[str]) -> ProtoType:
        match kind:
            case FieldKind.ENUM:
                assert type_name is not None
                return EnumType(self.registry.get_enum(type_name).enum_class)
            case FieldKind.MESSAGE:
                assert type_name is not None
                # nested codecs are resolved on first use, so recursive messages work
                message_type = MessageType(type_name, functools.partial(self.get, type_name))
                adapter = WELL_KNOWN_ADAPTERS.get(type_name)
                if adapter is not None:
                    return WellKnownType(adapter.with_long_mode(self.settings.LONG_MODE), message_type)
                return message_type
            case _:
                return make_scalar_type(kind.value, long_mode=self.settings.LONG_MODE)
