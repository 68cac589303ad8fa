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

from protowire.conf.settings import LongMode
from protowire.proto_types import (
    Fixed32Type,
    Fixed64Type,
    Int32Type,
    Int64Type,
    Sfixed32Type,
    Sfixed64Type,
    Sint32Type,
    Sint64Type,
    Uint32Type,
    Uint64Type,
    make_scalar_type,
)
from protowire.serialization import JsonDecodeError, PrecisionLossError
from protowire.serialization.consts import MAX_SAFE_INTEGER


@pytest.mark.parametrize('proto_type, value, encoded', [
    (Int32Type(), 0, '00'),
    (Int32Type(), 150, '9601'),
    (Int32Type(), -1, 'ffffffffffffffffff01'),
    (Int64Type(), -2**63, '80808080808080808001'),
    (Uint32Type(), 2**32 - 1, 'ffffffff0f'),
    (Uint64Type(), 2**64 - 1, 'ffffffffffffffffff01'),
    (Sint32Type(), -1, '01'),
    (Sint32Type(), -2**31, 'ffffffff0f'),
    (Sint64Type(), 2**63 - 1, 'feffffffffffffffff01'),
    (Fixed32Type(), 1, '01000000'),
    (Sfixed32Type(), -1, 'ffffffff'),
    (Fixed64Type(), 2**64 - 1, 'ffffffffffffffff'),
    (Sfixed64Type(), -2, 'feffffffffffffff'),
])
def test_binary_encoding(proto_type, value, encoded):
    data = proto_type.to_bytes(value)
    assert data.hex() == encoded
    assert proto_type.from_bytes(data) == value


@pytest.mark.parametrize('proto_type, value', [
    (Int32Type(), 2**31),
    (Int32Type(), -2**31 - 1),
    (Uint32Type(), -1),
    (Uint64Type(), 2**64),
    (Sint64Type(), -2**63 - 1),
    (Fixed32Type(), 2**32),
])
def test_out_of_range(proto_type, value):
    with pytest.raises(ValueError):
        proto_type.to_bytes(value)


def test_bool_is_not_an_int():
    with pytest.raises(TypeError):
        Int32Type().to_bytes(True)


def test_int32_accepts_five_byte_negative():
    # some encoders write negative int32 values as 32-bit two's complement
    assert Int32Type().from_bytes(bytes.fromhex('ffffffff0f')) == -1


def test_long_mode_only_affects_64_bit_kinds():
    assert make_scalar_type('int32', long_mode=LongMode.STRING).default() == 0
    assert make_scalar_type('fixed64', long_mode=LongMode.STRING).default() == '0'


def test_safe_integer_boundary_int_mode():
    int64 = Int64Type(LongMode.INT)
    assert int64.value_to_json(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER
    assert int64.value_to_json(MAX_SAFE_INTEGER + 1) == '9007199254740992'
    assert int64.value_to_json(-MAX_SAFE_INTEGER - 1) == '-9007199254740992'
    assert int64.from_bytes(int64.to_bytes(2**53)) == 2**53
    assert int64.json_to_value('9007199254740993') == 2**53 + 1


def test_safe_integer_boundary_number_mode():
    int64 = Int64Type(LongMode.NUMBER)
    assert int64.value_to_json(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER
    with pytest.raises(PrecisionLossError):
        int64.to_bytes(2**53)
    with pytest.raises(PrecisionLossError):
        int64.value_to_json(2**53)
    with pytest.raises(PrecisionLossError):
        int64.from_bytes(Int64Type().to_bytes(2**53))
    with pytest.raises(PrecisionLossError):
        int64.json_to_value('9007199254740992')


def test_string_mode():
    uint64 = Uint64Type(LongMode.STRING)
    data = uint64.to_bytes('18446744073709551615')
    assert data.hex() == 'ffffffffffffffffff01'
    assert uint64.from_bytes(data) == '18446744073709551615'
    assert uint64.value_to_json('5') == '5'
    assert uint64.json_to_value(5) == '5'
    assert uint64.is_default('0')
    with pytest.raises(ValueError):
        uint64.to_bytes('five')


def test_string_values_need_string_mode():
    with pytest.raises(TypeError):
        Int64Type(LongMode.INT).to_bytes('1')


@pytest.mark.parametrize('json_value, expected', [
    (1, 1),
    (-7, -7),
    (1.0, 1),
    ('42', 42),
    ('-3', -3),
    ('1e3', 1000),
])
def test_json_to_value(json_value, expected):
    assert Int32Type().json_to_value(json_value) == expected


@pytest.mark.parametrize('json_value', [1.5, 'abc', True, None, [], 2**31, 'Infinity', ' 42 ', '1_000', '+1', '0x10'])
def test_invalid_json(json_value):
    with pytest.raises(JsonDecodeError):
        Int32Type().json_to_value(json_value)


def test_map_keys():
    assert Sint64Type().value_to_json_key(-5) == '-5'
    assert Sint64Type().json_key_to_value('-5') == -5
    with pytest.raises(JsonDecodeError):
        Uint32Type().json_key_to_value('-5')
