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

r"""
This module implements field tags and wire types.

Every field on the wire starts with a varint tag `(field_number << 3) | wire_type`, the wire type tells how many bytes
follow, which makes it possible to skip fields without knowing their schema:

- VARINT (0): one varint
- I64 (1): 8 bytes
- LEN (2): a varint length followed by that many bytes
- SGROUP (3) / EGROUP (4): legacy groups, fields until the matching end-group tag, never written by this library
- I32 (5): 4 bytes

Wire types 6 and 7 do not exist.

>>> make_tag(1, WireType.LEN)
10
>>> split_tag(10)
(1, <WireType.LEN: 2>)

>>> se = Serializer.build_bytes_serializer()
>>> encode_tag(se, 2**29 - 1, WireType.I32)
>>> bytes(se.finalize()).hex()
'fdffffff0f'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('1896012204746573741801'))
>>> decode_tag(de)
(3, <WireType.VARINT: 0>)
>>> skip_field(de, 3, WireType.VARINT)
>>> decode_tag(de)
(4, <WireType.LEN: 2>)
>>> skip_field(de, 4, WireType.LEN)
>>> decode_tag(de)
(3, <WireType.VARINT: 0>)

>>> de = Deserializer.build_bytes_deserializer(b'\x00')
>>> decode_tag(de)
Traceback (most recent call last):
    ...
protowire.serialization.exceptions.InvalidTagError: invalid tag 0 (field number 0)
"""

from enum import IntEnum

from protowire.serialization import DepthLimitError, Deserializer, InvalidTagError, Serializer
from protowire.serialization.consts import UINT32_MAX

from .varint import decode_varint, encode_varint

MAX_FIELD_NUMBER = 2**29 - 1

# field numbers reserved for the protobuf implementation itself
RESERVED_FIELD_NUMBERS = range(19000, 20000)


class WireType(IntEnum):
    VARINT = 0
    I64 = 1
    LEN = 2
    SGROUP = 3
    EGROUP = 4
    I32 = 5


def make_tag(field_number: int, wire_type: WireType) -> int:
    if not 1 <= field_number <= MAX_FIELD_NUMBER:
        raise ValueError(f'field number out of range: {field_number}')
    return (field_number << 3) | wire_type


def split_tag(tag: int) -> tuple[int, WireType]:
    """ Split a tag into its field number and wire type, raises `InvalidTagError` if either is invalid.
    """
    field_number = tag >> 3
    raw_wire_type = tag & 0b111
    if field_number == 0:
        raise InvalidTagError(f'invalid tag {tag} (field number 0)')
    if field_number > MAX_FIELD_NUMBER or tag > UINT32_MAX:
        raise InvalidTagError(f'invalid tag {tag} (field number too large)')
    try:
        wire_type = WireType(raw_wire_type)
    except ValueError:
        raise InvalidTagError(f'invalid tag {tag} (wire type {raw_wire_type})') from None
    return field_number, wire_type


def encode_tag(serializer: Serializer, field_number: int, wire_type: WireType) -> None:
    encode_varint(serializer, make_tag(field_number, wire_type))


def decode_tag(deserializer: Deserializer) -> tuple[int, WireType]:
    """ Decodes a tag, returning its field number and wire type.

    End-group tags are returned as any other tag, it's up to the caller to decide whether one is expected.
    """
    return split_tag(decode_varint(deserializer))


def skip_field(deserializer: Deserializer, field_number: int, wire_type: WireType, *, _depth: int = 0) -> None:
    """ Skips the value of a field whose tag was just read.

    Groups are skipped up to the end-group tag with the same field number, nested groups count towards the recursion
    limit of the deserializer.
    """
    match wire_type:
        case WireType.VARINT:
            decode_varint(deserializer)
        case WireType.I64:
            deserializer.read_bytes(8)
        case WireType.LEN:
            length = decode_varint(deserializer)
            deserializer.read_bytes(length)
        case WireType.I32:
            deserializer.read_bytes(4)
        case WireType.SGROUP:
            _skip_group(deserializer, field_number, _depth + 1)
        case WireType.EGROUP:
            raise InvalidTagError(f'unexpected end-group tag for field {field_number}')
        case _:
            raise InvalidTagError(f'invalid wire type {wire_type}')


def _skip_group(deserializer: Deserializer, field_number: int, depth: int) -> None:
    if deserializer.nesting_depth() + depth > deserializer.recursion_limit():
        raise DepthLimitError(f'nested groups exceed the recursion limit of {deserializer.recursion_limit()}')
    while True:
        inner_number, inner_wire_type = decode_tag(deserializer)
        if inner_wire_type is WireType.EGROUP:
            if inner_number != field_number:
                raise InvalidTagError(f'end-group tag for field {inner_number} inside group {field_number}')
            return
        skip_field(deserializer, inner_number, inner_wire_type, _depth=depth)
