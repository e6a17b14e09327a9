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

"""Builder for PATCH requests."""

from __future__ import annotations

from fcrepo import headers as h
from fcrepo.builders.base import BodyRequestBuilder
from fcrepo.methods import HttpMethod


class PatchBuilder(BodyRequestBuilder):
    """Builds a PATCH request that updates a resource's RDF properties.

    The body is a SPARQL Update document, so body() defaults the content type
    to application/sparql-update instead of application/octet-stream.

    Example:
        ```python
        import io

        update = b'INSERT { <> <http://purl.org/dc/elements/1.1/title> "t" } WHERE {}'
        client.patch(uri).body(io.BytesIO(update)).if_match(etag).perform()
        ```
    """

    method = HttpMethod.PATCH
    default_content_type = h.SPARQL_UPDATE
