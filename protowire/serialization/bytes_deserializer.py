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

from typing_extensions import override

from .consts import DEFAULT_RECURSION_LIMIT
from .deserializer import Deserializer
from .exceptions import BadDataError, TruncatedBufferError
from .types import Buffer

_EMPTY_VIEW = memoryview(b'')


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation maintains a memoryview that is shortened as the bytes are read. Sub-deserializers created by
    `read_sub_deserializer` share the same underlying buffer, no bytes are copied.
    """

    def __init__(self, data: Buffer, *, depth: int = 0, recursion_limit: int = DEFAULT_RECURSION_LIMIT) -> None:
        self._view = memoryview(data)
        self._depth = depth
        self._recursion_limit = recursion_limit

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise BadDataError(f'trailing data: {len(self._view)} byte(s) left')
        del self._view

    @override
    def nesting_depth(self) -> int:
        return self._depth

    @override
    def recursion_limit(self) -> int:
        return self._recursion_limit

    @override
    def is_empty(self) -> bool:
        # XXX: least amount of OPs, "not" converts to bool with the correct semantics of "is empty"
        return not self._view

    @override
    def peek_byte(self) -> int:
        if not len(self._view):
            raise TruncatedBufferError('not enough bytes to read')
        return self._view[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        if exact and len(self._view) < n:
            raise TruncatedBufferError(f'not enough bytes to read: wanted {n}, have {len(self._view)}')
        return self._view[:n]

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._view = self._view[1:]
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        b = self.peek_bytes(n, exact=exact)
        self._view = self._view[n:]
        return b

    @override
    def read_all(self) -> memoryview:
        b = self._view
        self._view = _EMPTY_VIEW
        return b
