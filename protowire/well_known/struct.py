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
`google.protobuf.Struct`, `Value` and `ListValue`, the dynamically typed JSON values, represented natively as the
corresponding JSON values (`dict`, any JSON value and `list`).

On the wire a `Value` is a oneof of null, number (a double), string, bool, struct and list. Numbers always decode as
`float`. In JSON these types are just the JSON value itself.

>>> ValueAdapter().wrap({'a': [1, None]})
{'structValue': {'a': [1, None]}}
>>> ValueAdapter().unwrap({'numberValue': 2.0})
2.0
>>> StructAdapter().from_json({'a': float('nan')})
Traceback (most recent call last):
    ...
ValueError: non-finite numbers are not JSON values: nan
"""

import math
from typing import Any

from typing_extensions import override

from protowire.schema.descriptors import EnumDescriptor, FieldDescriptor, MessageDescriptor
from protowire.schema.field_kind import FieldKind, Label
from protowire.utils.json import JsonValue
from protowire.well_known.adapter import Message, WellKnownAdapter

NULL_VALUE_DESCRIPTOR = EnumDescriptor(name='google.protobuf.NullValue', values={'NULL_VALUE': 0})

STRUCT_DESCRIPTOR = MessageDescriptor(
    name='google.protobuf.Struct',
    fields=(
        FieldDescriptor(
            name='fields',
            number=1,
            kind=FieldKind.MAP,
            key_kind=FieldKind.STRING,
            value_kind=FieldKind.MESSAGE,
            type_name='google.protobuf.Value',
        ),
    ),
)

VALUE_DESCRIPTOR = MessageDescriptor(
    name='google.protobuf.Value',
    fields=(
        FieldDescriptor(name='null_value', number=1, kind=FieldKind.ENUM, type_name=NULL_VALUE_DESCRIPTOR.name,
                        oneof='kind'),
        FieldDescriptor(name='number_value', number=2, kind=FieldKind.DOUBLE, oneof='kind'),
        FieldDescriptor(name='string_value', number=3, kind=FieldKind.STRING, oneof='kind'),
        FieldDescriptor(name='bool_value', number=4, kind=FieldKind.BOOL, oneof='kind'),
        FieldDescriptor(name='struct_value', number=5, kind=FieldKind.MESSAGE, type_name=STRUCT_DESCRIPTOR.name,
                        oneof='kind'),
        FieldDescriptor(name='list_value', number=6, kind=FieldKind.MESSAGE, type_name='google.protobuf.ListValue',
                        oneof='kind'),
    ),
)

LIST_VALUE_DESCRIPTOR = MessageDescriptor(
    name='google.protobuf.ListValue',
    fields=(
        FieldDescriptor(name='values', number=1, kind=FieldKind.MESSAGE, label=Label.REPEATED,
                        type_name=VALUE_DESCRIPTOR.name),
    ),
)


def check_json_value(value: Any) -> None:
    """ Deep check that `value` is made only of JSON values, raises TypeError or ValueError otherwise.
    """
    match value:
        case None | bool() | str():
            pass
        case int():
            try:
                float(value)
            except OverflowError:
                raise ValueError(f'number too large for a double: {value}') from None
        case float():
            if not math.isfinite(value):
                raise ValueError(f'non-finite numbers are not JSON values: {value}')
        case dict():
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError(f'object keys must be str, got {type(key).__name__}')
                check_json_value(item)
        case list() | tuple():
            for item in value:
                check_json_value(item)
        case _:
            raise TypeError(f'{type(value).__name__} is not a JSON value')


def _copy_json_value(value: Any) -> JsonValue:
    match value:
        case dict():
            return {key: _copy_json_value(item) for key, item in value.items()}
        case list() | tuple():
            return [_copy_json_value(item) for item in value]
        case _:
            return value


class StructAdapter(WellKnownAdapter[dict[str, Any]]):
    full_name = STRUCT_DESCRIPTOR.name
    descriptor = STRUCT_DESCRIPTOR

    @override
    def default(self) -> dict[str, Any]:
        return {}

    @override
    def check_value(self, value: dict[str, Any]) -> None:
        if not isinstance(value, dict):
            raise TypeError(f'{self.full_name} expects a dict, got {type(value).__name__}')
        check_json_value(value)

    @override
    def normalize(self, value: dict[str, Any]) -> dict[str, Any]:
        self.check_value(value)
        return {key: _copy_json_value(item) for key, item in value.items()}

    @override
    def wrap(self, value: dict[str, Any]) -> Message:
        return {'fields': value}

    @override
    def unwrap(self, message: Message) -> dict[str, Any]:
        return dict(message['fields'])

    @override
    def to_json(self, value: dict[str, Any]) -> JsonValue:
        return _copy_json_value(value)

    @override
    def from_json(self, json_value: JsonValue) -> dict[str, Any]:
        if not isinstance(json_value, dict):
            raise TypeError(f'{self.full_name} expects an object, got {type(json_value).__name__}')
        return self.normalize(json_value)


class ListValueAdapter(WellKnownAdapter[list[Any]]):
    full_name = LIST_VALUE_DESCRIPTOR.name
    descriptor = LIST_VALUE_DESCRIPTOR

    @override
    def default(self) -> list[Any]:
        return []

    @override
    def check_value(self, value: list[Any]) -> None:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f'{self.full_name} expects a list, got {type(value).__name__}')
        check_json_value(value)

    @override
    def normalize(self, value: list[Any]) -> list[Any]:
        self.check_value(value)
        return [_copy_json_value(item) for item in value]

    @override
    def wrap(self, value: list[Any]) -> Message:
        return {'values': list(value)}

    @override
    def unwrap(self, message: Message) -> list[Any]:
        return list(message['values'])

    @override
    def to_json(self, value: list[Any]) -> JsonValue:
        return _copy_json_value(value)

    @override
    def from_json(self, json_value: JsonValue) -> list[Any]:
        if not isinstance(json_value, list):
            raise TypeError(f'{self.full_name} expects an array, got {type(json_value).__name__}')
        return self.normalize(json_value)


class ValueAdapter(WellKnownAdapter[Any]):
    """ Any JSON value, `None` is the null value.

    A singular `Value` field cannot distinguish an explicit null from an unset field, both are `None`.
    """

    full_name = VALUE_DESCRIPTOR.name
    descriptor = VALUE_DESCRIPTOR
    enums = (NULL_VALUE_DESCRIPTOR,)

    @override
    def default(self) -> Any:
        return None

    @override
    def check_value(self, value: Any) -> None:
        check_json_value(value)

    @override
    def normalize(self, value: Any) -> Any:
        self.check_value(value)
        return _copy_json_value(value)

    @override
    def wrap(self, value: Any) -> Message:
        match value:
            case None:
                return {'nullValue': 0}
            case bool():
                return {'boolValue': value}
            case int() | float():
                return {'numberValue': float(value)}
            case str():
                return {'stringValue': value}
            case dict():
                return {'structValue': value}
            case list() | tuple():
                return {'listValue': list(value)}
            case _:
                raise TypeError(f'{type(value).__name__} is not a JSON value')

    @override
    def unwrap(self, message: Message) -> Any:
        for name in ('numberValue', 'stringValue', 'boolValue', 'structValue', 'listValue'):
            if message.get(name) is not None:
                return message[name]
        return None

    @override
    def to_json(self, value: Any) -> JsonValue:
        return _copy_json_value(value)

    @override
    def from_json(self, json_value: JsonValue) -> Any:
        return self.normalize(json_value)
