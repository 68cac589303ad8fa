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
In-memory serializer with support for nested length-delimited regions.

Since the length of a nested message is only known after it is written, `fork()` saves the parts written so far and
starts a fresh list, `ldelim()` then computes the length of the fresh list, writes it as a varint on the saved list
and splices the nested parts after it. No byte is ever copied until `finalize()`.

>>> se = BytesSerializer()
>>> se.write_byte(0x0a)
>>> se.fork()
>>> se.write_bytes(b'test')
>>> se.ldelim()
>>> bytes(se.finalize()).hex()
'0a0474657374'

>>> se = BytesSerializer()
>>> se.ldelim()
Traceback (most recent call last):
    ...
protowire.serialization.exceptions.SerializationError: ldelim() called without a matching fork()
"""

from typing_extensions import override

from .exceptions import SerializationError
from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    This implementation defers joining everything until finalize is called, before that every write is stored as a
    memoryview in a list.
    """

    def __init__(self) -> None:
        self._parts: list[memoryview] = []
        self._pos: int = 0
        # saved (parts, pos) of every enclosing region, innermost last
        self._forks: list[tuple[list[memoryview], int]] = []

    @override
    def finalize(self) -> memoryview:
        if self._forks:
            raise SerializationError(f'{len(self._forks)} fork() region(s) were not closed with ldelim()')
        result = memoryview(b''.join(self._parts))
        del self._parts
        del self._pos
        del self._forks
        return result

    @override
    def fork(self) -> None:
        self._forks.append((self._parts, self._pos))
        self._parts = []

    @override
    def ldelim(self) -> None:
        from .encoding.varint import varint_bytes
        if not self._forks:
            raise SerializationError('ldelim() called without a matching fork()')
        nested_parts = self._parts
        parent_parts, fork_pos = self._forks.pop()
        prefix = memoryview(varint_bytes(self._pos - fork_pos))
        parent_parts.append(prefix)
        parent_parts.extend(nested_parts)
        self._parts = parent_parts
        self._pos += len(prefix)

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        # int.to_bytes checks for correct range
        self._parts.append(memoryview(int.to_bytes(data, length=1, byteorder='big')))
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        part = memoryview(data)
        self._parts.append(part)
        self._pos += len(part)
