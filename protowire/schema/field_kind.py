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

from enum import Enum

from protowire.serialization.encoding.tag import WireType


class FieldKind(str, Enum):
    DOUBLE = 'double'
    FLOAT = 'float'
    INT32 = 'int32'
    INT64 = 'int64'
    UINT32 = 'uint32'
    UINT64 = 'uint64'
    SINT32 = 'sint32'
    SINT64 = 'sint64'
    FIXED32 = 'fixed32'
    FIXED64 = 'fixed64'
    SFIXED32 = 'sfixed32'
    SFIXED64 = 'sfixed64'
    BOOL = 'bool'
    STRING = 'string'
    BYTES = 'bytes'
    ENUM = 'enum'
    MESSAGE = 'message'
    MAP = 'map'

    def wire_type(self) -> WireType:
        """Wire type of a single (non-packed) value of this kind."""
        return _KIND_WIRE_TYPES[self]

    def is_integral(self) -> bool:
        return self in INTEGRAL_KINDS

    def is_64_bit(self) -> bool:
        return self in INT64_KINDS

    def is_packable(self) -> bool:
        """Only scalars with a varint or fixed-size encoding can be packed."""
        return self.wire_type() is not WireType.LEN


class Label(str, Enum):
    # plain proto3 field, the default value is not written
    SINGULAR = 'singular'
    # proto3 `optional`, presence is tracked and the default value is written when set
    OPTIONAL = 'optional'
    REPEATED = 'repeated'


_KIND_WIRE_TYPES: dict[FieldKind, WireType] = {
    FieldKind.DOUBLE: WireType.I64,
    FieldKind.FLOAT: WireType.I32,
    FieldKind.INT32: WireType.VARINT,
    FieldKind.INT64: WireType.VARINT,
    FieldKind.UINT32: WireType.VARINT,
    FieldKind.UINT64: WireType.VARINT,
    FieldKind.SINT32: WireType.VARINT,
    FieldKind.SINT64: WireType.VARINT,
    FieldKind.FIXED32: WireType.I32,
    FieldKind.FIXED64: WireType.I64,
    FieldKind.SFIXED32: WireType.I32,
    FieldKind.SFIXED64: WireType.I64,
    FieldKind.BOOL: WireType.VARINT,
    FieldKind.STRING: WireType.LEN,
    FieldKind.BYTES: WireType.LEN,
    FieldKind.ENUM: WireType.VARINT,
    FieldKind.MESSAGE: WireType.LEN,
    FieldKind.MAP: WireType.LEN,
}

INTEGRAL_KINDS = frozenset({
    FieldKind.INT32,
    FieldKind.INT64,
    FieldKind.UINT32,
    FieldKind.UINT64,
    FieldKind.SINT32,
    FieldKind.SINT64,
    FieldKind.FIXED32,
    FieldKind.FIXED64,
    FieldKind.SFIXED32,
    FieldKind.SFIXED64,
})

INT64_KINDS = frozenset({
    FieldKind.INT64,
    FieldKind.UINT64,
    FieldKind.SINT64,
    FieldKind.FIXED64,
    FieldKind.SFIXED64,
})

MAP_KEY_KINDS = INTEGRAL_KINDS | {FieldKind.BOOL, FieldKind.STRING}

# kinds that need a `type_name`
NAMED_KINDS = frozenset({FieldKind.ENUM, FieldKind.MESSAGE})
