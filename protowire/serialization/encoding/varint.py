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
This module implements protobuf base-128 varints for unsigned 64-bit integers.

Every byte carries 7 bits of data, lowest group first, and the most significant bit is set on every byte except the
last one. It is the same layout as unsigned LEB128, but bounded to 64 bits: a value takes at most 10 bytes, a longer
sequence is malformed, and bits past the 64th are discarded when decoding.

Negative `int32`/`int64`/`enum` values are not zigzag-encoded, they are written as their 64-bit two's complement and
always take 10 bytes, `as_unsigned64` and `as_signed` convert between both representations.

>>> se = Serializer.build_bytes_serializer()
>>> encode_varint(se, 1)  # writes 01
>>> encode_varint(se, 300)  # writes ac02
>>> encode_varint(se, as_unsigned64(-1))  # writes ffffffffffffffffff01
>>> bytes(se.finalize()).hex()
'01ac02ffffffffffffffffff01'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01ac02ffffffffffffffffff01'))
>>> decode_varint(de)
1
>>> decode_varint(de)
300
>>> as_signed(decode_varint(de), 64)
-1
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffffffffffffffff01'))
>>> decode_varint(de)
Traceback (most recent call last):
    ...
protowire.serialization.exceptions.MalformedVarintError: varint is longer than 10 bytes
"""

from protowire.serialization import Deserializer, MalformedVarintError, Serializer
from protowire.serialization.adapters import MaxBytesExceededError
from protowire.serialization.consts import MASK_64, MAX_VARINT_BYTES, UINT64_MAX


def varint_bytes(value: int) -> bytes:
    """ Return the varint encoding of `value` as a new byte string.

    >>> varint_bytes(0).hex()
    '00'
    >>> varint_bytes(150).hex()
    '9601'
    """
    if value < 0 or value > UINT64_MAX:
        raise ValueError(f'varint out of range: {value}')
    data = bytearray()
    while value > 0b0111_1111:
        data.append((value & 0b0111_1111) | 0b1000_0000)
        value >>= 7
    data.append(value)
    return bytes(data)


def varint_size(value: int) -> int:
    """Number of bytes `value` takes when varint encoded."""
    return max(1, (value.bit_length() + 6) // 7)


def encode_varint(serializer: Serializer, value: int) -> None:
    """ Encodes an unsigned 64-bit integer as a varint.

    This module's docstring has more details and examples.
    """
    serializer.write_bytes(varint_bytes(value))


def decode_varint(deserializer: Deserializer) -> int:
    """ Decodes a varint as an unsigned 64-bit integer.

    This module's docstring has more details and examples.
    """
    result = 0
    shift = 0
    try:
        with deserializer.with_max_bytes(MAX_VARINT_BYTES) as de:
            while True:
                byte = de.read_byte()
                result |= (byte & 0b0111_1111) << shift
                shift += 7
                if (byte & 0b1000_0000) == 0:
                    return result & MASK_64
    except MaxBytesExceededError as e:
        raise MalformedVarintError(f'varint is longer than {MAX_VARINT_BYTES} bytes') from e


def as_unsigned64(value: int) -> int:
    """ Two's complement of a signed integer as an unsigned 64-bit integer, non-negative values are unchanged.

    >>> as_unsigned64(-2)
    18446744073709551614
    """
    return value & MASK_64


def as_signed(value: int, bits: int) -> int:
    """ Interpret the lowest `bits` of `value` as a two's complement signed integer.

    >>> as_signed(2**64 - 2, 64)
    -2
    >>> as_signed(2**64 - 2, 32)
    -2
    >>> as_signed(2**31, 32)
    -2147483648
    """
    mask = (1 << bits) - 1
    value &= mask
    if value >> (bits - 1):
        return value - (1 << bits)
    return value
