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
from protowire.serialization.compound_encoding.collection import decode_packed, encode_packed
from protowire.serialization.encoding.tag import WireType, encode_tag
from protowire.utils.json import JsonValue

T = TypeVar('T')


class RepeatedField(Field[list[T]]):
    """ A repeated field, values are lists.

    Packable kinds are written as a single packed region unless the field disables packing, strings, bytes and
    messages are written as one tagged value per element. An empty list writes nothing. When reading, packable kinds
    accept both forms, and several packed regions of the same field are concatenated.
    """

    __slots__ = ('proto_type', 'packed')

    def __init__(self, descriptor: FieldDescriptor, proto_type: ProtoType[T]) -> None:
        super().__init__(descriptor)
        self.proto_type = proto_type
        self.packed = descriptor.packed and proto_type.packable

    @override
    def default(self) -> list[T]:
        return []

    @override
    def is_set(self, value: list[T]) -> bool:
        return len(value) > 0

    @override
    def check_value(self, value: list[T]) -> None:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f'{self.name} expects a list, got {type(value).__name__}')
        for item in value:
            self.proto_type.check_value(item)

    @override
    def accepts(self, wire_type: WireType) -> bool:
        if wire_type is WireType.LEN and self.proto_type.packable:
            return True
        return wire_type is self.proto_type.wire_type

    @override
    def encode(self, serializer: Serializer, value: list[T]) -> None:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f'{self.name} expects a list, got {type(value).__name__}')
        if not value:
            return
        if self.packed:
            encode_tag(serializer, self.number, WireType.LEN)
            encode_packed(serializer, value, self.proto_type.serialize)
            return
        for item in value:
            encode_tag(serializer, self.number, self.proto_type.wire_type)
            self.proto_type.serialize(serializer, item)

    @override
    def decode(self, deserializer: Deserializer, wire_type: WireType, current: list[T]) -> list[T]:
        if wire_type is WireType.LEN and self.proto_type.packable:
            current.extend(decode_packed(deserializer, self.proto_type.deserialize, list))
        else:
            current.append(self.proto_type.deserialize(deserializer))
        return current

    @override
    def emits_json(self, value: list[T], *, emit_defaults: bool) -> bool:
        # arrays are always present, even when empty
        return True

    @override
    def to_json(self, value: list[T]) -> JsonValue:
        return [self.proto_type.value_to_json(item) for item in value]

    @override
    def from_json(self, json_value: JsonValue) -> list[T]:
        if json_value is None:
            return []
        if not isinstance(json_value, list):
            raise JsonDecodeError(f'expected an array, got {type(json_value).__name__}')
        result: list[T] = []
        for index, item in enumerate(json_value):
            try:
                result.append(self.proto_type.json_to_value(item))
            except JsonDecodeError as e:
                raise e.with_prefix(f'[{index}]') from e
        return result

    @override
    def from_partial(self, value: Any) -> list[T]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise TypeError(f'{self.name} expects a list, got {type(value).__name__}')
        return [self.proto_type.from_partial(item) for item in value]
