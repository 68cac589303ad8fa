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
from typing import ClassVar, Generic, TypeAlias, TypeVar, final

from protowire.serialization import Deserializer, JsonDecodeError, Serializer
from protowire.serialization.encoding.tag import WireType

T = TypeVar('T')


class ProtoType(ABC, Generic[T]):
    """ This class is used to model the value of a protobuf kind and how it will be (de)serialized.

    A ProtoType only knows about untagged values: how one value of its kind is written to the wire (without the tag),
    how it is read back, how it maps to JSON and what its zero value is. Tags, presence, repetition and default
    elision are the concern of `protowire.fields`, which are built on top of ProtoType instances.

    Instances are immutable and can be shared between codecs.
    """

    # These are all the values that can be observed when parsing a JSON with the builtin json module
    # See: https://docs.python.org/3/library/json.html#encoders-and-decoders
    # It is a shortcut to allow methods to talk about values that can be used with the json module
    Json: TypeAlias = dict | list | str | int | float | bool | None

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize these
    wire_type: ClassVar[WireType]
    packable: ClassVar[bool]

    @abstractmethod
    def default(self) -> T:
        """ The zero value of this kind, a fresh object is returned on every call.
        """
        raise NotImplementedError

    def is_default(self, value: T, /) -> bool:
        """ Whether `value` is the zero value, plain proto3 fields holding it are not written.
        """
        return bool(value == self.default())

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError if the value's type is not compatible, or a ValueError if it's out of range.

        This is a deep check, compound values (messages, structs) have every member checked.
        """
        # XXX: subclasses must implement ProtoType._check_value, not ProtoType.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value without its tag.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement ProtoType._serialize, not ProtoType.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value whose tag has just been read.
        """
        # XXX: subclasses must implement ProtoType._deserialize, not ProtoType.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes` and avoid using the serialization system.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @final
    def json_to_value(self, json_value: Json, /) -> T:
        """ Use this to convert a value that comes out from `json.load` into the value that this class expects.

        Will raise a JsonDecodeError if the given `json_value` is not compatible.
        """
        # XXX: subclasses must implement ProtoType._json_to_value, not ProtoType.json_to_value
        try:
            return self._json_to_value(json_value)
        except (TypeError, ValueError) as e:
            raise JsonDecodeError(str(e)) from e

    @final
    def value_to_json(self, value: T, /) -> Json:
        """ Use this to convert a value to an object compatible with `json.dump`.

        Will raise a TypeError or ValueError if the given `value` is not compatible.
        """
        # XXX: subclasses must implement ProtoType._value_to_json, not ProtoType.value_to_json
        self._check_value(value, deep=False)
        return self._value_to_json(value)

    def from_partial(self, value: T, /) -> T:
        """ Normalize a value given to `MessageCodec.from_partial`, the default is to check and keep it.
        """
        self._check_value(value, deep=False)
        return value

    def json_key_to_value(self, key: str, /) -> T:
        """ Parse a JSON object key of a map field, only map key kinds support this.
        """
        raise JsonDecodeError(f'{type(self).__name__} cannot be used as a map key')

    def value_to_json_key(self, value: T, /) -> str:
        raise TypeError(f'{type(self).__name__} cannot be used as a map key')

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `ProtoType.check_value`.

        Compound values should use `ProtoType._check_value` on the inner type(s) instead of `ProtoType.check_value`
        and pass the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError

    @abstractmethod
    def _json_to_value(self, json_value: Json, /) -> T:
        """ Inner implementation of `ProtoType.json_to_value`, TypeError and ValueError become JsonDecodeError."""
        raise NotImplementedError

    @abstractmethod
    def _value_to_json(self, value: T, /) -> Json:
        """ Inner implementation of `ProtoType.value_to_json`."""
        raise NotImplementedError
