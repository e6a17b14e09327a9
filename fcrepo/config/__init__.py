# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for the fcrepo client.

Settings are resolved from built-in defaults, an optional YAML file and
FCREPO_* environment variables (optionally read from a .env file), in that
order of precedence.

Public API:

- load_client_config: Resolve the effective ClientConfig
- ClientConfig: Frozen dataclass accepted by FcrepoClient.from_config()

Example:
    Basic usage:

        from fcrepo import FcrepoClient
        from fcrepo.config import load_client_config

        client = FcrepoClient.from_config(load_client_config())

"""

from .loader import ClientConfig, load_client_config

__all__ = ["ClientConfig", "load_client_config"]
