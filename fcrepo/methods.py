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

"""HTTP methods supported by the repository client.

Each member maps one-to-one to a request builder and knows whether the
method encloses an entity. Only entity-enclosing methods (POST, PUT, PATCH)
ever carry a request body.

Example:
    ```python
    from fcrepo.methods import HttpMethod

    request = HttpMethod.PUT.create_request("http://localhost:8080/rest/obj")
    print(request.method)  # "PUT"
    ```
"""

from __future__ import annotations

from enum import Enum

import requests


class HttpMethod(Enum):
    """Repository HTTP methods, valued by their wire name."""

    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    DELETE = "DELETE"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"

    @property
    def entity_enclosing(self) -> bool:
        """True when requests of this method may carry a body."""
        return self in _ENTITY_ENCLOSING

    def create_request(self, uri: str) -> requests.Request:
        """Create an empty transport request bound to this method and URI."""
        return requests.Request(method=self.value, url=uri)


_ENTITY_ENCLOSING = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})
