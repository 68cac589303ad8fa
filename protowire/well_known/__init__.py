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
Well-known types with a native Python representation.

Their descriptors are part of every `SchemaRegistry`, and fields referring to them use the native values instead of
message dicts.
"""

from protowire.schema.descriptors import EnumDescriptor, MessageDescriptor
from protowire.well_known.adapter import WellKnownAdapter
from protowire.well_known.duration import DurationAdapter
from protowire.well_known.struct import ListValueAdapter, StructAdapter, ValueAdapter
from protowire.well_known.timestamp import TimestampAdapter
from protowire.well_known.wrappers import WRAPPER_ADAPTERS, WrapperAdapter

WELL_KNOWN_ADAPTERS: dict[str, WellKnownAdapter] = {
    adapter.full_name: adapter
    for adapter in (
        TimestampAdapter(),
        DurationAdapter(),
        StructAdapter(),
        ValueAdapter(),
        ListValueAdapter(),
        *WRAPPER_ADAPTERS,
    )
}

WELL_KNOWN_MESSAGES: tuple[MessageDescriptor, ...] = tuple(
    adapter.descriptor for adapter in WELL_KNOWN_ADAPTERS.values()
)

WELL_KNOWN_ENUMS: tuple[EnumDescriptor, ...] = tuple(
    enum for adapter in WELL_KNOWN_ADAPTERS.values() for enum in adapter.enums
)

__all__ = [
    'WELL_KNOWN_ADAPTERS',
    'WELL_KNOWN_ENUMS',
    'WELL_KNOWN_MESSAGES',
    'DurationAdapter',
    'ListValueAdapter',
    'StructAdapter',
    'TimestampAdapter',
    'ValueAdapter',
    'WellKnownAdapter',
    'WrapperAdapter',
]
