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
This module implements the fixed-width little-endian encodings: `fixed32`, `sfixed32` and `float` use 4 bytes (wire
type I32), `fixed64`, `sfixed64` and `double` use 8 bytes (wire type I64).

>>> se = Serializer.build_bytes_serializer()
>>> encode_fixed32(se, 1)  # writes 01000000
>>> encode_sfixed64(se, -2)  # writes feffffffffffffff
>>> encode_double(se, 1.5)  # writes 000000000000f83f
>>> bytes(se.finalize()).hex()
'01000000feffffffffffffff000000000000f83f'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000000feffffffffffffff000000000000f83f'))
>>> decode_fixed32(de)
1
>>> decode_sfixed64(de)
-2
>>> decode_double(de)
1.5
>>> de.finalize()

>>> se = Serializer.build_bytes_serializer()
>>> encode_fixed32(se, -1)
Traceback (most recent call last):
    ...
ValueError: fixed32 out of range: -1
"""

import struct

from protowire.serialization import Deserializer, Serializer
from protowire.serialization.consts import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, UINT32_MAX, UINT64_MAX


def _check_range(name: str, value: int, lower: int, upper: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f'{name} expects an int, got {type(value).__name__}')
    if not lower <= value <= upper:
        raise ValueError(f'{name} out of range: {value}')


def encode_fixed32(serializer: Serializer, value: int) -> None:
    _check_range('fixed32', value, 0, UINT32_MAX)
    serializer.write_struct((value,), '<I')


def decode_fixed32(deserializer: Deserializer) -> int:
    (value,) = deserializer.read_struct('<I')
    return value


def encode_sfixed32(serializer: Serializer, value: int) -> None:
    _check_range('sfixed32', value, INT32_MIN, INT32_MAX)
    serializer.write_struct((value,), '<i')


def decode_sfixed32(deserializer: Deserializer) -> int:
    (value,) = deserializer.read_struct('<i')
    return value


def encode_fixed64(serializer: Serializer, value: int) -> None:
    _check_range('fixed64', value, 0, UINT64_MAX)
    serializer.write_struct((value,), '<Q')


def decode_fixed64(deserializer: Deserializer) -> int:
    (value,) = deserializer.read_struct('<Q')
    return value


def encode_sfixed64(serializer: Serializer, value: int) -> None:
    _check_range('sfixed64', value, INT64_MIN, INT64_MAX)
    serializer.write_struct((value,), '<q')


def decode_sfixed64(deserializer: Deserializer) -> int:
    (value,) = deserializer.read_struct('<q')
    return value


def encode_float(serializer: Serializer, value: float) -> None:
    """ Encodes a single precision float, finite values beyond its range raise `ValueError`.
    """
    try:
        serializer.write_struct((value,), '<f')
    except OverflowError as e:
        raise ValueError(f'float out of range: {value}') from e


def decode_float(deserializer: Deserializer) -> float:
    (value,) = deserializer.read_struct('<f')
    return value


def encode_double(serializer: Serializer, value: float) -> None:
    serializer.write_struct((value,), '<d')


def decode_double(deserializer: Deserializer) -> float:
    (value,) = deserializer.read_struct('<d')
    return value
