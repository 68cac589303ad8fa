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

from enum import IntEnum
from typing import TypeVar

from structlog import get_logger
from typing_extensions import override

from protowire.proto_types.proto_type import ProtoType
from protowire.serialization import Deserializer, Serializer
from protowire.serialization.consts import INT32_MAX, INT32_MIN
from protowire.serialization.encoding.tag import WireType
from protowire.serialization.encoding.varint import as_signed, as_unsigned64, decode_varint, encode_varint

logger = get_logger()

T = TypeVar('T', bound=IntEnum)

UNRECOGNIZED_NAME = 'UNRECOGNIZED'
UNRECOGNIZED_VALUE = -1


class EnumType(ProtoType[T]):
    """ Proto type for enums, values are members of an IntEnum that has an extra `UNRECOGNIZED = -1` member.

    Ordinals that are not members of the enum decode to `UNRECOGNIZED` instead of failing, so that newer senders
    can add enum values. `UNRECOGNIZED` is written by name in JSON and encoded as the ordinal -1 in binary, the
    original ordinal is not kept.
    """

    __slots__ = ('enum_class', 'log')

    wire_type = WireType.VARINT
    packable = True

    def __init__(self, enum_class: type[T]) -> None:
        if UNRECOGNIZED_NAME not in enum_class.__members__:
            raise TypeError(f'{enum_class.__name__} must have an {UNRECOGNIZED_NAME} member')
        self.enum_class = enum_class
        self.log = logger.new(enum=enum_class.__qualname__)

    @property
    def unrecognized(self) -> T:
        return self.enum_class[UNRECOGNIZED_NAME]

    def _from_ordinal(self, ordinal: int) -> T:
        try:
            return self.enum_class(ordinal)
        except ValueError:
            self.log.debug('unrecognized enum value', value=ordinal)
            return self.unrecognized

    @override
    def default(self) -> T:
        return self.enum_class(0)

    @override
    def is_default(self, value: T, /) -> bool:
        return value == 0

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'{self.enum_class.__name__} expects an enum member or int, got {type(value).__name__}')
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(f'{self.enum_class.__name__} value out of range: {value}')

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        encode_varint(serializer, as_unsigned64(int(value)))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        return self._from_ordinal(as_signed(decode_varint(deserializer), 32))

    @override
    def _json_to_value(self, json_value: ProtoType.Json, /) -> T:
        match json_value:
            case bool():
                raise TypeError(f'{self.enum_class.__name__} expects a name or a number, got a boolean')
            case str():
                try:
                    return self.enum_class[json_value]
                except KeyError:
                    self.log.debug('unrecognized enum name', name=json_value)
                    return self.unrecognized
            case int():
                if not INT32_MIN <= json_value <= INT32_MAX:
                    raise ValueError(f'{self.enum_class.__name__} value out of range: {json_value}')
                return self._from_ordinal(json_value)
            case _:
                raise TypeError(f'{self.enum_class.__name__} expects a name or a number, got '
                                f'{type(json_value).__name__}')

    @override
    def _value_to_json(self, value: T, /) -> ProtoType.Json:
        try:
            return self.enum_class(value).name
        except ValueError:
            # plain ints that are not members have no name
            return int(value)

    @override
    def from_partial(self, value: T, /) -> T:
        self._check_value(value, deep=False)
        return self._from_ordinal(int(value))
