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
A map entry is a nested message with the key as field 1 and the value as field 2, a map field is a repeated field of
entries.

Layout: [N: varint][tag(1)][key][tag(2)][value]

Both key and value are always written, even when they hold a default value. When decoding, the fields of an entry may
come in any order, unknown fields are skipped, and a missing key or value is replaced by its default.

>>> from protowire.serialization.encoding.tag import WireType
>>> from protowire.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from protowire.serialization.encoding.bool import encode_bool, decode_bool
>>> key_codec = MapEntryItem(WireType.LEN, encode_utf8, decode_utf8, str)
>>> value_codec = MapEntryItem(WireType.VARINT, encode_bool, decode_bool, bool)
>>> se = Serializer.build_bytes_serializer()
>>> encode_map_entry(se, 'foo', False, key_codec, value_codec)
>>> bytes(se.finalize()).hex()
'070a03666f6f1000'

Breakdown of the result:

    07: 7 bytes follow
    0a: field 1, wire type LEN
    03666f6f: 'foo' with length prefix
    10: field 2, wire type VARINT
    00: False

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('021001'))
>>> decode_map_entry(de, key_codec, value_codec)
('', True)
>>> de.finalize()
"""

from typing import Any, Callable, Generic, NamedTuple, TypeVar

from protowire.serialization import Deserializer, InvalidTagError, Serializer
from protowire.serialization.encoding.tag import WireType, decode_tag, encode_tag, skip_field
from protowire.serialization.encoding.varint import decode_varint

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')

MAP_KEY_FIELD_NUMBER = 1
MAP_VALUE_FIELD_NUMBER = 2


class MapEntryItem(NamedTuple, Generic[KT]):
    """How to write, read and default one side (key or value) of a map entry."""
    wire_type: WireType
    encoder: Encoder[KT]
    decoder: Decoder[KT]
    default_factory: Callable[[], KT]


def encode_map_entry(
    serializer: Serializer,
    key: KT,
    value: VT,
    key_item: MapEntryItem[KT],
    value_item: MapEntryItem[VT],
) -> None:
    serializer.fork()
    encode_tag(serializer, MAP_KEY_FIELD_NUMBER, key_item.wire_type)
    key_item.encoder(serializer, key)
    encode_tag(serializer, MAP_VALUE_FIELD_NUMBER, value_item.wire_type)
    value_item.encoder(serializer, value)
    serializer.ldelim()


def decode_map_entry(
    deserializer: Deserializer,
    key_item: MapEntryItem[KT],
    value_item: MapEntryItem[VT],
) -> tuple[KT, VT]:
    length = decode_varint(deserializer)
    entry = deserializer.read_sub_deserializer(length)
    found: dict[int, Any] = {}
    while not entry.is_empty():
        field_number, wire_type = decode_tag(entry)
        if wire_type is WireType.EGROUP:
            raise InvalidTagError(f'unexpected end-group tag for field {field_number}')
        if field_number == MAP_KEY_FIELD_NUMBER and wire_type is key_item.wire_type:
            found[field_number] = key_item.decoder(entry)
        elif field_number == MAP_VALUE_FIELD_NUMBER and wire_type is value_item.wire_type:
            found[field_number] = value_item.decoder(entry)
        else:
            skip_field(entry, field_number, wire_type)
    entry.finalize()
    key = found[MAP_KEY_FIELD_NUMBER] if MAP_KEY_FIELD_NUMBER in found else key_item.default_factory()
    value = found[MAP_VALUE_FIELD_NUMBER] if MAP_VALUE_FIELD_NUMBER in found else value_item.default_factory()
    return key, value
