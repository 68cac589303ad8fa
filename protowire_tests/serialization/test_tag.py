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

import pytest

from protowire.serialization import DepthLimitError, Deserializer, InvalidTagError, TruncatedBufferError
from protowire.serialization.encoding.tag import (
    MAX_FIELD_NUMBER,
    WireType,
    decode_tag,
    make_tag,
    skip_field,
    split_tag,
)
from protowire.serialization.encoding.varint import varint_bytes


@pytest.mark.parametrize('field_number, wire_type, tag', [
    (1, WireType.VARINT, 0x08),
    (1, WireType.LEN, 0x0a),
    (2, WireType.I64, 0x11),
    (15, WireType.I32, 0x7d),
    (16, WireType.VARINT, 0x80),
    (MAX_FIELD_NUMBER, WireType.VARINT, 0xfffffff8),
])
def test_make_and_split_tag(field_number, wire_type, tag):
    assert make_tag(field_number, wire_type) == tag
    assert split_tag(tag) == (field_number, wire_type)


@pytest.mark.parametrize('field_number', [0, -1, MAX_FIELD_NUMBER + 1])
def test_make_tag_out_of_range(field_number):
    with pytest.raises(ValueError):
        make_tag(field_number, WireType.VARINT)


@pytest.mark.parametrize('tag', [0, 0x07, 0x0e, 0x0f])
def test_invalid_tags(tag):
    with pytest.raises(InvalidTagError):
        split_tag(tag)


def test_tag_above_32_bits_is_invalid():
    de = Deserializer.build_bytes_deserializer(varint_bytes(1 << 35))
    with pytest.raises(InvalidTagError):
        decode_tag(de)


@pytest.mark.parametrize('wire_type, payload', [
    (WireType.VARINT, 'ac02'),
    (WireType.I64, '0102030405060708'),
    (WireType.LEN, '03616263'),
    (WireType.I32, '01020304'),
    # group with a varint and a nested group inside
    (WireType.SGROUP, '0801' + '1b' + '1001' + '1c' + '0c'),
])
def test_skip_field(wire_type, payload):
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(payload + '08'))
    skip_field(de, 1, wire_type)
    assert decode_tag(de) == (1, WireType.VARINT)


def test_skip_truncated_length_delimited():
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('0561'))
    with pytest.raises(TruncatedBufferError):
        skip_field(de, 1, WireType.LEN)


def test_stray_end_group():
    de = Deserializer.build_bytes_deserializer(b'')
    with pytest.raises(InvalidTagError):
        skip_field(de, 1, WireType.EGROUP)


def test_end_group_number_mismatch():
    # group 1 closed by the end-group tag of field 2
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('14'))
    with pytest.raises(InvalidTagError):
        skip_field(de, 1, WireType.SGROUP)


def test_deeply_nested_groups():
    depth = 20
    data = bytes.fromhex('0b' * depth + '0c' * depth)
    de = Deserializer.build_bytes_deserializer(data[1:], recursion_limit=depth)
    skip_field(de, 1, WireType.SGROUP)
    assert de.is_empty()

    de = Deserializer.build_bytes_deserializer(data[1:], recursion_limit=depth - 1)
    with pytest.raises(DepthLimitError):
        skip_field(de, 1, WireType.SGROUP)
