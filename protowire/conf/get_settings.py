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

import os

from structlog import get_logger

from protowire.conf.settings import CodecSettings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'PROTOWIRE_CONFIG_YAML'


def get_settings() -> CodecSettings:
    """
    Returns the codec settings.

    Tries to get the configuration from a yaml filepath in the 'PROTOWIRE_CONFIG_YAML' env var, if it's not set the
    defaults are returned.

    Nothing is cached, the file is read again on every call, so callers should keep the returned object and pass it
    to the codecs that need it.
    """
    settings_yaml_filepath = os.environ.get(CONFIG_YAML_ENV_VAR)
    if not settings_yaml_filepath:
        return CodecSettings()
    log = logger.new(source=settings_yaml_filepath)
    settings = CodecSettings.from_yaml(filepath=settings_yaml_filepath)
    log.debug('codec settings loaded', settings=settings.model_dump())
    return settings
