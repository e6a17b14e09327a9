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

"""Builder for OPTIONS requests."""

from __future__ import annotations

from fcrepo.builders.base import RequestBuilder
from fcrepo.methods import HttpMethod


class OptionsBuilder(RequestBuilder):
    """Builds an OPTIONS request to list the methods a resource supports.

    The repository answers with an Allow header and, for containers, the
    Accept-Post and Accept-Patch media types.
    """

    method = HttpMethod.OPTIONS
