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
Schema-driven protobuf codec.

The binary wire format and the JSON mapping are implemented once, in a generic codec that is parametrized by message
descriptors (see `protowire.schema`), instead of being generated per message type. The entry point for most users is
`protowire.codec.MessageCodec`, usually obtained through `SchemaRegistry.codec()`.
"""

from protowire.version import __version__

__all__ = ['__version__']
