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

from protowire.serialization import SerializationError, Serializer
from protowire.serialization.adapters import MaxBytesExceededError
from protowire.serialization.encoding.tag import WireType, encode_tag
from protowire.serialization.encoding.utf8 import encode_utf8


def test_fork_and_ldelim():
    se = Serializer.build_bytes_serializer()
    encode_tag(se, 1, WireType.LEN)
    se.fork()
    encode_tag(se, 1, WireType.LEN)
    encode_utf8(se, 'origin')
    se.ldelim()
    encode_tag(se, 2, WireType.VARINT)
    se.write_byte(1)
    assert bytes(se.finalize()).hex() == '0a080a066f726967696e' + '1001'


def test_nested_forks():
    se = Serializer.build_bytes_serializer()
    se.fork()
    se.write_bytes(b'a')
    se.fork()
    se.write_bytes(b'bc')
    se.fork()
    se.ldelim()
    se.ldelim()
    se.write_bytes(b'd')
    se.ldelim()
    # outer: 'a' + [03 'bc' 00] + 'd'
    assert bytes(se.finalize()) == b'\x06a\x03bc\x00d'


def test_cur_pos_counts_length_prefixes():
    se = Serializer.build_bytes_serializer()
    se.write_bytes(b'xy')
    se.fork()
    se.write_bytes(b'z' * 200)
    assert se.cur_pos() == 202
    se.ldelim()
    assert se.cur_pos() == 204
    data = bytes(se.finalize())
    assert len(data) == 204
    assert data[2:4] == bytes.fromhex('c801')


def test_ldelim_without_fork():
    se = Serializer.build_bytes_serializer()
    with pytest.raises(SerializationError):
        se.ldelim()


def test_finalize_with_open_fork():
    se = Serializer.build_bytes_serializer()
    se.fork()
    with pytest.raises(SerializationError):
        se.finalize()


def test_max_bytes_serializer_forwards_forks():
    se = Serializer.build_bytes_serializer()
    with se.with_max_bytes(4) as limited:
        limited.fork()
        limited.write_bytes(b'abc')
        limited.ldelim()
        with pytest.raises(MaxBytesExceededError):
            limited.write_bytes(b'de')
