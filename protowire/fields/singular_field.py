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
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.tag import WireType, encode_tag
from protowire.utils.json import JsonValue

T = TypeVar('T')


class SingularField(Field[T]):
    """ A plain proto3 field: there is no presence, holding the default value is the same as not being set.
    """

    __slots__ = ('proto_type',)

    def __init__(self, descriptor: FieldDescriptor, proto_type: ProtoType[T]) -> None:
        super().__init__(descriptor)
        self.proto_type = proto_type

    @override
    def default(self) -> T:
        return self.proto_type.default()

    @override
    def is_set(self, value: T) -> bool:
        return not self.proto_type.is_default(value)

    @override
    def check_value(self, value: T) -> None:
        self.proto_type.check_value(value)

    @override
    def accepts(self, wire_type: WireType) -> bool:
        return wire_type is self.proto_type.wire_type

    @override
    def encode(self, serializer: Serializer, value: T) -> None:
        # 0 == False, so the type is checked before comparing with the default
        self.proto_type.check_value(value)
        if not self.is_set(value):
            return
        encode_tag(serializer, self.number, self.proto_type.wire_type)
        self.proto_type.serialize(serializer, value)

    @override
    def decode(self, deserializer: Deserializer, wire_type: WireType, current: T) -> T:
        return self.proto_type.deserialize(deserializer)

    @override
    def emits_json(self, value: T, *, emit_defaults: bool) -> bool:
        self.proto_type.check_value(value)
        return emit_defaults or self.is_set(value)

    @override
    def to_json(self, value: T) -> JsonValue:
        return self.proto_type.value_to_json(value)

    @override
    def from_json(self, json_value: JsonValue) -> T:
        if json_value is None:
            return self.default()
        return self.proto_type.json_to_value(json_value)

    @override
    def from_partial(self, value: Any) -> T:
        if value is None:
            return self.default()
        return self.proto_type.from_partial(value)
