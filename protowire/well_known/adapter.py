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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from typing_extensions import Self

from protowire.conf.settings import LongMode
from protowire.schema.descriptors import EnumDescriptor, MessageDescriptor
from protowire.utils.json import JsonValue

N = TypeVar('N')
Message = dict[str, Any]


class WellKnownAdapter(ABC, Generic[N]):
    """ Conversion between a well-known message and its native Python value.

    `wrap`/`unwrap` convert to and from the message value the codec uses for the wire format, `to_json`/`from_json`
    implement the special JSON mapping of the type. Adapters are immutable.
    """

    __slots__ = ()

    # XXX: subclasses must initialize these
    full_name: ClassVar[str]
    descriptor: ClassVar[MessageDescriptor]
    enums: ClassVar[tuple[EnumDescriptor, ...]] = ()

    def with_long_mode(self, long_mode: LongMode) -> Self:
        """Adapter to use in codecs with the given `LongMode`, only adapters holding 64-bit integers depend on it."""
        return self

    @abstractmethod
    def default(self) -> N:
        """Native value of the empty message."""
        raise NotImplementedError

    @abstractmethod
    def check_value(self, value: N) -> None:
        """Raise TypeError if `value` is not a valid native value, or ValueError if it's out of range."""
        raise NotImplementedError

    def normalize(self, value: N) -> N:
        """Return the canonical native value, used by `from_partial`."""
        self.check_value(value)
        return value

    @abstractmethod
    def wrap(self, value: N) -> Message:
        raise NotImplementedError

    @abstractmethod
    def unwrap(self, message: Message) -> N:
        """Raise ValueError if the message holds an invalid value."""
        raise NotImplementedError

    @abstractmethod
    def to_json(self, value: N) -> JsonValue:
        raise NotImplementedError

    @abstractmethod
    def from_json(self, json_value: JsonValue) -> N:
        """Raise TypeError or ValueError if the JSON value is not valid."""
        raise NotImplementedError
