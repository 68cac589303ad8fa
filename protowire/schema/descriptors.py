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
Message and enum descriptors, the data a code generator would otherwise turn into per-message code.

Descriptors are frozen pydantic models, so they can be loaded from YAML/JSON documents and are validated on
construction:

>>> FieldDescriptor(name='remote_url', number=1, kind=FieldKind.STRING).json_name
'remoteUrl'
>>> try:
...     FieldDescriptor(name='x', number=19000, kind=FieldKind.INT32)
... except ValueError as e:
...     print('is reserved' in str(e))
True
"""

from __future__ import annotations

import functools
from enum import IntEnum
from typing import Any, Optional

from pydantic import model_validator
from typing_extensions import Self

from protowire.proto_types.enum_type import UNRECOGNIZED_NAME, UNRECOGNIZED_VALUE
from protowire.schema.field_kind import MAP_KEY_KINDS, NAMED_KINDS, FieldKind, Label
from protowire.serialization.consts import INT32_MAX, INT32_MIN
from protowire.serialization.encoding.tag import MAX_FIELD_NUMBER, RESERVED_FIELD_NUMBERS
from protowire.utils.pydantic import BaseModel


def to_json_name(name: str) -> str:
    """ The lowerCamelCase name protoc derives from a field name.

    >>> to_json_name('foo_bar_baz')
    'fooBarBaz'
    >>> to_json_name('already')
    'already'
    """
    parts: list[str] = []
    capitalize_next = False
    for char in name:
        if char == '_':
            capitalize_next = True
        elif capitalize_next:
            parts.append(char.upper())
            capitalize_next = False
        else:
            parts.append(char)
    return ''.join(parts)


class FieldDescriptor(BaseModel):
    # declared name, usually snake_case
    name: str

    number: int

    kind: FieldKind

    label: Label = Label.SINGULAR

    # full name of the enum or message, for map fields it refers to the value
    type_name: Optional[str] = None

    # only for map fields
    key_kind: Optional[FieldKind] = None
    value_kind: Optional[FieldKind] = None

    # name of the oneof group this field belongs to
    oneof: Optional[str] = None

    # proto3 packs repeated scalars unless told otherwise, ignored for kinds that cannot be packed
    packed: bool = True

    # defaults to the lowerCamelCase version of `name`
    json_name: str = ''

    @model_validator(mode='before')
    @classmethod
    def _fill_json_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get('json_name') and isinstance(data.get('name'), str):
            return {**data, 'json_name': to_json_name(data['name'])}
        return data

    @model_validator(mode='after')
    def _check_field(self) -> Self:
        if not self.name.isidentifier():
            raise ValueError(f'invalid field name: {self.name!r}')
        if not 1 <= self.number <= MAX_FIELD_NUMBER:
            raise ValueError(f'field number {self.number} out of range')
        if self.number in RESERVED_FIELD_NUMBERS:
            raise ValueError(f'field number {self.number} is reserved')

        if self.kind is FieldKind.MAP:
            if self.key_kind is None or self.value_kind is None:
                raise ValueError(f'map field {self.name} needs key_kind and value_kind')
            if self.key_kind not in MAP_KEY_KINDS:
                raise ValueError(f'{self.key_kind.value} cannot be used as a map key')
            if self.value_kind is FieldKind.MAP:
                raise ValueError('map values cannot be maps')
            if self.label is not Label.SINGULAR:
                raise ValueError(f'map field {self.name} cannot be {self.label.value}')
        elif self.key_kind is not None or self.value_kind is not None:
            raise ValueError(f'key_kind and value_kind are only allowed on map fields, not on {self.name}')

        if self.element_kind in NAMED_KINDS and not self.type_name:
            raise ValueError(f'field {self.name} of kind {self.element_kind.value} needs a type_name')
        if self.element_kind not in NAMED_KINDS and self.type_name:
            raise ValueError(f'type_name is not allowed for field {self.name} of kind {self.element_kind.value}')

        if self.oneof is not None:
            if self.kind is FieldKind.MAP or self.label is not Label.SINGULAR:
                raise ValueError(f'field {self.name} in oneof {self.oneof} must be a singular non-map field')
        return self

    @property
    def element_kind(self) -> FieldKind:
        """The kind of each value, which is `value_kind` for maps."""
        if self.kind is FieldKind.MAP:
            assert self.value_kind is not None
            return self.value_kind
        return self.kind

    def is_map(self) -> bool:
        return self.kind is FieldKind.MAP

    def is_repeated(self) -> bool:
        return self.label is Label.REPEATED

    def has_presence(self) -> bool:
        """Whether unset (None) is distinct from the default value."""
        return (
            self.label is Label.OPTIONAL
            or self.oneof is not None
            or (self.kind is FieldKind.MESSAGE and self.label is Label.SINGULAR)
        )

    def is_packed(self) -> bool:
        return self.is_repeated() and self.packed and self.kind.is_packable()


class MessageDescriptor(BaseModel):
    # full name, including the package, for example `attestation.v1.Commit`
    name: str

    fields: tuple[FieldDescriptor, ...] = ()

    @model_validator(mode='after')
    def _check_message(self) -> Self:
        for attr in ('number', 'name', 'json_name'):
            seen: set[Any] = set()
            for field in self.fields:
                value = getattr(field, attr)
                if value in seen:
                    raise ValueError(f'duplicate field {attr} in {self.name}: {value}')
                seen.add(value)
        oneof_names = {field.oneof for field in self.fields if field.oneof is not None}
        clashes = oneof_names & {field.name for field in self.fields}
        if clashes:
            raise ValueError(f'oneof names clash with field names in {self.name}: {sorted(clashes)}')
        return self

    @property
    def package(self) -> str:
        package, _, _ = self.name.rpartition('.')
        return package

    def get_field(self, name: str) -> FieldDescriptor | None:
        """Lookup a field by its declared name or its JSON name."""
        for field in self.fields:
            if name == field.name or name == field.json_name:
                return field
        return None

    def get_field_by_number(self, number: int) -> FieldDescriptor | None:
        for field in self.fields:
            if field.number == number:
                return field
        return None

    def oneofs(self) -> dict[str, tuple[FieldDescriptor, ...]]:
        """Fields of each oneof group, in declaration order."""
        groups: dict[str, list[FieldDescriptor]] = {}
        for field in self.fields:
            if field.oneof is not None:
                groups.setdefault(field.oneof, []).append(field)
        return {name: tuple(members) for name, members in groups.items()}


class EnumDescriptor(BaseModel):
    # full name, including the package
    name: str

    # name -> ordinal, aliases (several names for the same ordinal) are allowed
    values: dict[str, int]

    @model_validator(mode='after')
    def _check_enum(self) -> Self:
        if 0 not in self.values.values():
            raise ValueError(f'enum {self.name} must have a zero value')
        for value_name, ordinal in self.values.items():
            if not value_name.isidentifier():
                raise ValueError(f'invalid enum value name: {value_name!r}')
            if value_name == UNRECOGNIZED_NAME or ordinal == UNRECOGNIZED_VALUE:
                raise ValueError(f'{UNRECOGNIZED_NAME} = {UNRECOGNIZED_VALUE} is reserved in enum {self.name}')
            if not INT32_MIN <= ordinal <= INT32_MAX:
                raise ValueError(f'enum value {value_name} out of range: {ordinal}')
        return self

    @property
    def enum_class(self) -> type[IntEnum]:
        """ IntEnum with every value plus `UNRECOGNIZED = -1`, equal descriptors share the same class.
        """
        return _make_enum_class(self.name, tuple(self.values.items()))


@functools.cache
def _make_enum_class(name: str, values: tuple[tuple[str, int], ...]) -> type[IntEnum]:
    _, _, short_name = name.rpartition('.')
    members = [*values, (UNRECOGNIZED_NAME, UNRECOGNIZED_VALUE)]
    return IntEnum(short_name, members, qualname=name)  # type: ignore[return-value]
