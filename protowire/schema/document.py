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
Schema documents, the YAML/JSON form used to declare messages and enums without writing descriptors by hand.

Names are relative to the document package, field `type_name`s are resolved later by the registry using protobuf
scoping rules:

.. code-block:: yaml

    package: attestation.v1
    enums:
      Status:
        values: {STATUS_UNSPECIFIED: 0, STATUS_OK: 1}
    messages:
      Remote:
        fields:
          - {name: url, number: 1, kind: string}
      Commit:
        fields:
          - {name: status, number: 1, kind: enum, type_name: Status}
          - {name: remotes, number: 6, kind: message, type_name: Remote, label: repeated}
"""

from pydantic import Field

from protowire.schema.descriptors import EnumDescriptor, FieldDescriptor, MessageDescriptor
from protowire.utils.pydantic import BaseModel


class MessageDocument(BaseModel):
    fields: tuple[FieldDescriptor, ...] = ()


class EnumDocument(BaseModel):
    values: dict[str, int]


class SchemaDocument(BaseModel):
    package: str = ''
    messages: dict[str, MessageDocument] = Field(default_factory=dict)
    enums: dict[str, EnumDocument] = Field(default_factory=dict)

    def full_name(self, name: str) -> str:
        return f'{self.package}.{name}' if self.package else name

    def message_descriptors(self) -> list[MessageDescriptor]:
        return [
            MessageDescriptor(name=self.full_name(name), fields=message.fields)
            for name, message in self.messages.items()
        ]

    def enum_descriptors(self) -> list[EnumDescriptor]:
        return [
            EnumDescriptor(name=self.full_name(name), values=enum.values)
            for name, enum in self.enums.items()
        ]
