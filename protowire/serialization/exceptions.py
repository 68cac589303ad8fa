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

from typing_extensions import Self


class SerializationError(Exception):
    """Base class for every error raised while encoding or decoding."""


class BadDataError(SerializationError):
    """The input is structurally invalid (bad UTF-8, out of range well-known value, trailing data, ...)."""


class MalformedVarintError(BadDataError):
    """The continuation bits of a varint did not terminate within 10 bytes."""


class InvalidTagError(BadDataError):
    """A tag with field number 0, an invalid wire type, or a stray end-group marker was found."""


class TruncatedBufferError(SerializationError):
    """A read would go past the end of the buffer or of the current length-delimited region."""


class PrecisionLossError(SerializationError):
    """A 64-bit value cannot be represented exactly with the configured integer representation."""


class DepthLimitError(SerializationError):
    """Nested messages are deeper than the configured recursion limit."""


class JsonDecodeError(SerializationError):
    """ A JSON value could not be converted, `path` points at the offending field.

    The path uses JSON names joined by dots and `[i]`/`[key]` for list items and map values, for example
    `remotes[0].url`.
    """

    def __init__(self, message: str, path: str = '') -> None:
        self.message = message
        self.path = path
        super().__init__(f'{path}: {message}' if path else message)

    def with_prefix(self, prefix: str) -> Self:
        """Return a copy of this error with `prefix` prepended to the path."""
        if not self.path:
            path = prefix
        elif self.path.startswith('['):
            path = prefix + self.path
        else:
            path = f'{prefix}.{self.path}'
        return type(self)(self.message, path)
