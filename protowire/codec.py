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
The generic message codec.

A `MessageCodec` is built from a `MessageDescriptor` by `SchemaRegistry.codec()` and implements, for that message
type, what generated code would otherwise implement per message: binary encode/decode, JSON conversion and building
messages from partial values.

Messages are plain dicts keyed by the JSON (lowerCamelCase) name of each field. Decoded messages, and messages created
with `from_partial`/`create`, always contain every field of the message.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from structlog import get_logger

from protowire.conf.settings import CodecSettings
from protowire.fields import Field
from protowire.schema.descriptors import MessageDescriptor
from protowire.serialization import Deserializer, InvalidTagError, JsonDecodeError, Serializer
from protowire.serialization.encoding.tag import WireType, decode_tag, skip_field
from protowire.utils.json import JsonValue, json_dumpb, json_loadb

logger = get_logger()

Message = dict[str, Any]


class MessageCodec:
    __slots__ = ('descriptor', 'settings', 'fields', 'log', '_fields_by_number', '_fields_by_key', '_oneofs')

    def __init__(self, descriptor: MessageDescriptor, fields: Sequence[Field], *, settings: CodecSettings) -> None:
        self.descriptor = descriptor
        self.settings = settings
        self.fields = tuple(fields)
        self.log = logger.new(message=descriptor.name)
        self._fields_by_number: dict[int, Field] = {field.number: field for field in self.fields}
        # both the JSON name and the declared name are accepted as keys
        self._fields_by_key: dict[str, Field] = {}
        for field in self.fields:
            self._fields_by_key[field.proto_name] = field
            self._fields_by_key[field.name] = field
        self._oneofs: dict[str, tuple[Field, ...]] = {}
        for field in self.fields:
            if field.oneof is not None:
                self._oneofs[field.oneof] = self._oneofs.get(field.oneof, ()) + (field,)

    @property
    def name(self) -> str:
        return self.descriptor.name

    def __repr__(self) -> str:
        return f'MessageCodec({self.name})'

    def default(self) -> Message:
        """A message with every field holding its default value."""
        return {field.name: field.default() for field in self.fields}

    def create(self, base: Optional[Mapping[str, Any]] = None) -> Message:
        return self.from_partial(base or {})

    def from_partial(self, partial: Mapping[str, Any]) -> Message:
        """ Build a complete message from a partial one.

        Missing fields (or fields set to None) get their default value, nested messages are built from partials too.
        Keys can be JSON names or declared names, any other key raises KeyError.
        """
        if not isinstance(partial, Mapping):
            raise TypeError(f'{self.name} expects a mapping, got {type(partial).__name__}')
        message = self.default()
        for key, value in partial.items():
            field = self._get_field(key)
            message[field.name] = field.from_partial(value)
        self._check_oneofs(message)
        return message

    def check_value(self, message: Mapping[str, Any]) -> None:
        """ Deep check of every field of a message, raises TypeError, ValueError or KeyError.
        """
        if not isinstance(message, Mapping):
            raise TypeError(f'{self.name} expects a mapping, got {type(message).__name__}')
        for key, value in message.items():
            field = self._get_field(key)
            if value is not None:
                field.check_value(value)
        self._check_oneofs(message)

    def encode(self, message: Mapping[str, Any]) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.encode_to(serializer, message)
        return bytes(serializer.finalize())

    def encode_to(self, serializer: Serializer, message: Mapping[str, Any]) -> None:
        """ Write the fields of a message, without a length prefix.

        Fields are written in declaration order. Missing fields and fields set to None are not written, plain fields
        holding their default value are not written either.
        """
        if not isinstance(message, Mapping):
            raise TypeError(f'{self.name} expects a mapping, got {type(message).__name__}')
        for key in message:
            self._get_field(key)
        self._check_oneofs(message)
        for field in self.fields:
            value = self._get_value(message, field)
            if value is None:
                continue
            field.encode(serializer, value)

    def decode(self, data: bytes | bytearray | memoryview) -> Message:
        deserializer = Deserializer.build_bytes_deserializer(data, recursion_limit=self.settings.RECURSION_LIMIT)
        message = self.decode_from(deserializer)
        deserializer.finalize()
        return message

    def decode_from(self, deserializer: Deserializer) -> Message:
        """ Read fields until the deserializer is empty.

        Unknown fields and fields with an unexpected wire type are skipped. For oneof groups the last member read
        wins, the others are reset to None.
        """
        message = self.default()
        while not deserializer.is_empty():
            field_number, wire_type = decode_tag(deserializer)
            if wire_type is WireType.EGROUP:
                raise InvalidTagError(f'unexpected end-group tag for field {field_number}')
            field = self._fields_by_number.get(field_number)
            if field is None:
                self.log.debug('skipping unknown field', field_number=field_number, wire_type=wire_type.name)
                skip_field(deserializer, field_number, wire_type)
                continue
            if not field.accepts(wire_type):
                self.log.debug('skipping field with unexpected wire type', field=field.name,
                               wire_type=wire_type.name)
                skip_field(deserializer, field_number, wire_type)
                continue
            message[field.name] = field.decode(deserializer, wire_type, message[field.name])
            if field.oneof is not None:
                self._clear_oneof_siblings(message, field)
        return message

    def to_json(self, message: Mapping[str, Any]) -> JsonValue:
        if not isinstance(message, Mapping):
            raise TypeError(f'{self.name} expects a mapping, got {type(message).__name__}')
        for key in message:
            self._get_field(key)
        self._check_oneofs(message)
        result: dict[str, JsonValue] = {}
        for field in self.fields:
            value = self._get_value(message, field)
            if value is None:
                value = field.default()
            if not field.emits_json(value, emit_defaults=self.settings.JSON_EMIT_DEFAULTS):
                continue
            json_key = field.proto_name if self.settings.JSON_USE_PROTO_NAMES else field.name
            result[json_key] = field.to_json(value)
        return result

    def from_json(self, json_value: JsonValue) -> Message:
        """ Build a message from its JSON object, errors are reported as JsonDecodeError with the path of the field.
        """
        if not isinstance(json_value, dict):
            raise JsonDecodeError(f'{self.name} expects an object, got {type(json_value).__name__}')
        message = self.default()
        oneof_members: dict[str, Field] = {}
        for key, json_item in json_value.items():
            field = self._fields_by_key.get(key)
            if field is None:
                if self.settings.JSON_IGNORE_UNKNOWN_FIELDS:
                    self.log.debug('ignoring unknown JSON field', key=key)
                    continue
                raise JsonDecodeError(f'unknown field in {self.name}', key)
            try:
                value = field.from_json(json_item)
            except JsonDecodeError as e:
                raise e.with_prefix(field.name) from e
            if field.oneof is not None and value is not None:
                other = oneof_members.setdefault(field.oneof, field)
                if other is not field:
                    raise JsonDecodeError(f'oneof {field.oneof} already has {other.name} set', field.name)
            message[field.name] = value
        return message

    def to_json_bytes(self, message: Mapping[str, Any]) -> bytes:
        return json_dumpb(self.to_json(message))

    def from_json_bytes(self, raw: bytes) -> Message:
        try:
            json_value = json_loadb(raw)
        except json.JSONDecodeError as e:
            raise JsonDecodeError(f'invalid JSON: {e}') from e
        return self.from_json(json_value)

    def _get_field(self, key: str) -> Field:
        try:
            return self._fields_by_key[key]
        except KeyError:
            raise KeyError(f'{self.name} has no field {key!r}') from None

    def _get_value(self, message: Mapping[str, Any], field: Field) -> Any:
        value = message.get(field.name)
        if value is None:
            value = message.get(field.proto_name)
        return value

    def _check_oneofs(self, message: Mapping[str, Any]) -> None:
        for oneof, members in self._oneofs.items():
            set_members = [
                field.name for field in members if self._get_value(message, field) is not None
            ]
            if len(set_members) > 1:
                raise ValueError(f'oneof {oneof} of {self.name} has more than one member set: {set_members}')

    def _clear_oneof_siblings(self, message: Message, field: Field) -> None:
        assert field.oneof is not None
        for sibling in self._oneofs[field.oneof]:
            if sibling is not field:
                message[sibling.name] = None
