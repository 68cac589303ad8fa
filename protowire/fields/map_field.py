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

from typing import Any, TypeVar

from typing_extensions import override

from protowire.fields.field import Field
from protowire.proto_types.proto_type import ProtoType
from protowire.schema.descriptors import FieldDescriptor
from protowire.serialization import Deserializer, JsonDecodeError, Serializer
from protowire.serialization.compound_encoding.mapping import MapEntryItem, decode_map_entry, encode_map_entry
from protowire.serialization.encoding.tag import WireType, encode_tag
from protowire.utils.json import JsonValue

KT = TypeVar('KT')
VT = TypeVar('VT')


class MapField(Field[dict[KT, VT]]):
    """ A map field, values are dicts.

    Every item is written as a length-delimited entry message with the key as field 1 and the value as field 2. When
    reading, a later entry with the same key replaces the earlier one. In JSON keys are always strings.
    """

    __slots__ = ('key_type', 'value_type', '_key_item', '_value_item')

    def __init__(self, descriptor: FieldDescriptor, key_type: ProtoType[KT], value_type: ProtoType[VT]) -> None:
        super().__init__(descriptor)
        self.key_type = key_type
        self.value_type = value_type
        self._key_item = MapEntryItem(key_type.wire_type, key_type.serialize, key_type.deserialize, key_type.default)
        self._value_item = MapEntryItem(
            value_type.wire_type,
            value_type.serialize,
            value_type.deserialize,
            value_type.default,
        )

    @override
    def default(self) -> dict[KT, VT]:
        return {}

    @override
    def is_set(self, value: dict[KT, VT]) -> bool:
        return len(value) > 0

    @override
    def check_value(self, value: dict[KT, VT]) -> None:
        if not isinstance(value, dict):
            raise TypeError(f'{self.name} expects a dict, got {type(value).__name__}')
        for key, item in value.items():
            self.key_type.check_value(key)
            self.value_type.check_value(item)

    @override
    def accepts(self, wire_type: WireType) -> bool:
        return wire_type is WireType.LEN

    @override
    def encode(self, serializer: Serializer, value: dict[KT, VT]) -> None:
        if not isinstance(value, dict):
            raise TypeError(f'{self.name} expects a dict, got {type(value).__name__}')
        for key, item in value.items():
            encode_tag(serializer, self.number, WireType.LEN)
            encode_map_entry(serializer, key, item, self._key_item, self._value_item)

    @override
    def decode(self, deserializer: Deserializer, wire_type: WireType, current: dict[KT, VT]) -> dict[KT, VT]:
        key, item = decode_map_entry(deserializer, self._key_item, self._value_item)
        current[key] = item
        return current

    @override
    def emits_json(self, value: dict[KT, VT], *, emit_defaults: bool) -> bool:
        return True

    @override
    def to_json(self, value: dict[KT, VT]) -> JsonValue:
        return {
            self.key_type.value_to_json_key(key): self.value_type.value_to_json(item)
            for key, item in value.items()
        }

    @override
    def from_json(self, json_value: JsonValue) -> dict[KT, VT]:
        if json_value is None:
            return {}
        if not isinstance(json_value, dict):
            raise JsonDecodeError(f'expected an object, got {type(json_value).__name__}')
        result: dict[KT, VT] = {}
        for json_key, json_item in json_value.items():
            try:
                key = self.key_type.json_key_to_value(json_key)
                result[key] = self.value_type.json_to_value(json_item)
            except JsonDecodeError as e:
                raise e.with_prefix(f'[{json_key}]') from e
        return result

    @override
    def from_partial(self, value: Any) -> dict[KT, VT]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise TypeError(f'{self.name} expects a dict, got {type(value).__name__}')
        return {
            self.key_type.from_partial(key): self.value_type.from_partial(item)
            for key, item in value.items()
        }
