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
A length-delimited value is any value whose encoding is prefixed by its size in bytes, nested messages being the most
common case.

Layout: [N: varint][value: N bytes]

Encoding uses `fork()`/`ldelim()` so the inner encoder does not need to know its size in advance. Decoding gives the
inner decoder a sub-deserializer bounded to exactly N bytes, which must be fully consumed.

>>> from protowire.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_length_delimited(se, 'foo', encode_utf8)
>>> bytes(se.finalize()).hex()
'0403666f6f'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0403666f6f'))
>>> decode_length_delimited(de, decode_utf8)
'foo'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0503666f6f00'))
>>> decode_length_delimited(de, decode_utf8)
Traceback (most recent call last):
    ...
protowire.serialization.exceptions.BadDataError: trailing data: 1 byte(s) left
"""

from typing import TypeVar

from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.varint import decode_varint

from . import Decoder, Encoder

T = TypeVar('T')


def encode_length_delimited(serializer: Serializer, value: T, encoder: Encoder[T]) -> None:
    serializer.fork()
    encoder(serializer, value)
    serializer.ldelim()


def decode_length_delimited(deserializer: Deserializer, decoder: Decoder[T]) -> T:
    length = decode_varint(deserializer)
    sub_deserializer = deserializer.read_sub_deserializer(length)
    value = decoder(sub_deserializer)
    sub_deserializer.finalize()
    return value
