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

from protowire.serialization import Deserializer, Serializer
from protowire.serialization.compound_encoding.collection import decode_packed, encode_packed
from protowire.serialization.compound_encoding.mapping import MapEntryItem, decode_map_entry, encode_map_entry
from protowire.serialization.encoding.bool import decode_bool, encode_bool
from protowire.serialization.encoding.fixed import decode_fixed32, encode_fixed32
from protowire.serialization.encoding.tag import WireType
from protowire.serialization.encoding.utf8 import decode_utf8, encode_utf8
from protowire.serialization.encoding.varint import decode_varint, encode_varint

STR_ITEM = MapEntryItem(WireType.LEN, encode_utf8, decode_utf8, str)
VARINT_ITEM = MapEntryItem(WireType.VARINT, encode_varint, decode_varint, int)


def test_packed_fixed32():
    se = Serializer.build_bytes_serializer()
    encode_packed(se, [1, 2], encode_fixed32)
    data = bytes(se.finalize())
    assert data.hex() == '080100000002000000'
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_packed(de, decode_fixed32, list) == [1, 2]
    de.finalize()


def test_empty_packed_region():
    se = Serializer.build_bytes_serializer()
    encode_packed(se, [], encode_varint)
    assert bytes(se.finalize()) == b'\x00'
    de = Deserializer.build_bytes_deserializer(b'\x00')
    assert decode_packed(de, decode_varint, list) == []


def test_map_entry_round_trip():
    se = Serializer.build_bytes_serializer()
    encode_map_entry(se, 'a', 0, STR_ITEM, VARINT_ITEM)
    data = bytes(se.finalize())
    # the default value is still written
    assert data.hex() == '050a01611000'
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_map_entry(de, STR_ITEM, VARINT_ITEM) == ('a', 0)
    de.finalize()


def test_map_entry_any_order_and_unknown_fields():
    # value, unknown field 3, then key
    data = bytes.fromhex('07' + '1007' + '1801' + '0a0162')
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_map_entry(de, STR_ITEM, VARINT_ITEM) == ('b', 7)
    de.finalize()


def test_map_entry_missing_key_and_value():
    de = Deserializer.build_bytes_deserializer(b'\x00')
    assert decode_map_entry(de, STR_ITEM, MapEntryItem(WireType.VARINT, encode_bool, decode_bool, bool)) == ('', False)
