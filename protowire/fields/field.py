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
from typing import Any, Generic, TypeVar

from protowire.schema.descriptors import FieldDescriptor
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.encoding.tag import WireType
from protowire.utils.json import JsonValue

T = TypeVar('T')


class Field(ABC, Generic[T]):
    """ This class is used to model how a field of a message is written, read and mapped to JSON.

    Where a `ProtoType` deals with single untagged values, a Field adds the tag and the label semantics on top of it:

    - singular fields elide the default value
    - fields with presence (optional, oneof members, messages) use `None` for unset and write any set value
    - repeated fields write one element per tag, or a single packed region for scalars
    - map fields write one entry message per item

    The value a field holds in a message dict is owned by the message, fields are stateless and can be shared.
    """

    __slots__ = ('descriptor', 'name', 'number')

    def __init__(self, descriptor: FieldDescriptor) -> None:
        self.descriptor = descriptor
        # message dicts are keyed by the JSON name
        self.name = descriptor.json_name
        self.number = descriptor.number

    @property
    def proto_name(self) -> str:
        return self.descriptor.name

    @property
    def oneof(self) -> str | None:
        return self.descriptor.oneof

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.name}={self.number})'

    @abstractmethod
    def default(self) -> T:
        """Value of this field in a new message, mutable defaults are fresh objects."""
        raise NotImplementedError

    @abstractmethod
    def is_set(self, value: T) -> bool:
        """Whether the value is written to the wire."""
        raise NotImplementedError

    @abstractmethod
    def check_value(self, value: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def accepts(self, wire_type: WireType) -> bool:
        """Whether a value with this wire type can be decoded, otherwise it is skipped as unknown."""
        raise NotImplementedError

    @abstractmethod
    def encode(self, serializer: Serializer, value: T) -> None:
        """Write the tag(s) and value(s), or nothing if the value is not set."""
        raise NotImplementedError

    @abstractmethod
    def decode(self, deserializer: Deserializer, wire_type: WireType, current: T) -> T:
        """Read one occurrence whose tag was just read, repeated and map fields merge it into `current`."""
        raise NotImplementedError

    @abstractmethod
    def emits_json(self, value: T, *, emit_defaults: bool) -> bool:
        raise NotImplementedError

    @abstractmethod
    def to_json(self, value: T) -> JsonValue:
        raise NotImplementedError

    @abstractmethod
    def from_json(self, json_value: JsonValue) -> T:
        """Raises JsonDecodeError, with the path relative to this field."""
        raise NotImplementedError

    @abstractmethod
    def from_partial(self, value: Any) -> T:
        """Build the value from a partial one, `None` means the default."""
        raise NotImplementedError
