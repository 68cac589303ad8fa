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

from enum import IntEnum

import pytest

from protowire.proto_types import EnumType
from protowire.schema import EnumDescriptor
from protowire.serialization import JsonDecodeError

STATUS = EnumDescriptor(name='attestation.v1.Status', values={
    'STATUS_UNSPECIFIED': 0,
    'STATUS_PENDING': 1,
    'STATUS_VERIFIED': 2,
    'STATUS_REVOKED': -3,
}).enum_class


def test_enum_class():
    assert STATUS.__qualname__ == 'attestation.v1.Status'
    assert STATUS.UNRECOGNIZED == -1
    assert issubclass(STATUS, IntEnum)


def test_binary():
    enum_type = EnumType(STATUS)
    assert enum_type.to_bytes(STATUS.STATUS_VERIFIED).hex() == '02'
    assert enum_type.from_bytes(b'\x02') is STATUS.STATUS_VERIFIED
    # negative values are sign-extended like int32
    data = enum_type.to_bytes(STATUS.STATUS_REVOKED)
    assert len(data) == 10
    assert enum_type.from_bytes(data) is STATUS.STATUS_REVOKED


def test_unknown_ordinal_is_unrecognized():
    enum_type = EnumType(STATUS)
    assert enum_type.from_bytes(b'\x07') is STATUS.UNRECOGNIZED
    assert enum_type.to_bytes(STATUS.UNRECOGNIZED) == b'\xff' * 9 + b'\x01'
    assert enum_type.from_bytes(enum_type.to_bytes(STATUS.UNRECOGNIZED)) is STATUS.UNRECOGNIZED


def test_json():
    enum_type = EnumType(STATUS)
    assert enum_type.value_to_json(STATUS.STATUS_PENDING) == 'STATUS_PENDING'
    assert enum_type.value_to_json(STATUS.UNRECOGNIZED) == 'UNRECOGNIZED'
    assert enum_type.json_to_value('STATUS_PENDING') is STATUS.STATUS_PENDING
    assert enum_type.json_to_value(2) is STATUS.STATUS_VERIFIED
    assert enum_type.json_to_value('STATUS_FROM_THE_FUTURE') is STATUS.UNRECOGNIZED
    assert enum_type.json_to_value(9) is STATUS.UNRECOGNIZED
    with pytest.raises(JsonDecodeError):
        enum_type.json_to_value(True)
    with pytest.raises(JsonDecodeError):
        enum_type.json_to_value(2**31)


def test_from_partial_accepts_ints():
    enum_type = EnumType(STATUS)
    assert enum_type.from_partial(1) is STATUS.STATUS_PENDING
    assert enum_type.default() is STATUS.STATUS_UNSPECIFIED
    assert enum_type.is_default(0)


def test_enum_class_needs_unrecognized():
    class Plain(IntEnum):
        ZERO = 0

    with pytest.raises(TypeError):
        EnumType(Plain)
