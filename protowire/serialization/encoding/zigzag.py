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

"""
ZigZag maps signed integers to unsigned ones so that values with a small magnitude get a short varint, it is used only
by the `sint32` and `sint64` kinds.

>>> [zigzag_encode(n) for n in (0, -1, 1, -2, 2)]
[0, 1, 2, 3, 4]
>>> zigzag_encode(-2**31, 32)
4294967295
>>> [zigzag_decode(n) for n in (0, 1, 2, 3, 4)]
[0, -1, 1, -2, 2]
"""


def zigzag_encode(value: int, bits: int = 64) -> int:
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise ValueError(f'value does not fit in a signed {bits}-bit integer: {value}')
    return ((value << 1) ^ (value >> (bits - 1))) & ((1 << bits) - 1)


def zigzag_decode(value: int) -> int:
    return (value >> 1) ^ -(value & 1)
