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

"""Builder for GET requests, with content negotiation and caching headers.

GET supports:

- accept(): content negotiation (e.g., text/turtle, application/ld+json)
- if_none_match() / if_modified_since(): conditional GET, answered with
    HTTP 304 when the cached copy is still current
- prefer_minimal() / prefer_representation(): the LDP Prefer header, which
    selects the triples included in an RDF representation
- range(): partial retrieval of binaries
- disable_redirects(): return the 3xx response of an external-content
    binary instead of following it

Example:
    Revalidate a cached Turtle representation:
        ```python
        response = (
            client.get(uri)
            .accept("text/turtle")
            .if_none_match(cached_etag)
            .perform()
        )
        if response.status_code == 304:
            print("cache is current")
        ```
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import requests

from fcrepo.builders.base import RequestBuilder
from fcrepo.methods import HttpMethod
from fcrepo.request_spec import format_http_date

PREFER_MINIMAL = "return=minimal"
PREFER_REPRESENTATION = "return=representation"


class GetBuilder(RequestBuilder):
    """Builds a GET request to retrieve a resource."""

    method = HttpMethod.GET

    def populate_request(self, request: requests.Request) -> None:
        self._apply_spec(request)

    def accept(self, media_type: str | None):
        """Request a representation in the given media type."""
        self._check_configuring()
        self.spec.accept = media_type
        return self

    def if_none_match(self, etag: str | None):
        """Only return content if the resource no longer has this ETag."""
        self._check_configuring()
        self.spec.if_none_match = etag
        return self

    def if_modified_since(self, modified: str | datetime | None):
        """Only return content if the resource changed after this date."""
        self._check_configuring()
        self.spec.if_modified_since = (
            format_http_date(modified) if modified is not None else None
        )
        return self

    def prefer_minimal(self):
        """Request a minimal representation (server-managed triples only)."""
        self._check_configuring()
        self.spec.prefer = PREFER_MINIMAL
        return self

    def prefer_representation(
        self,
        include_uris: Iterable[str] | None = None,
        omit_uris: Iterable[str] | None = None,
    ):
        """Request a representation including or omitting sets of triples.

        Args:
            include_uris: LDP preference URIs to include.
            omit_uris: LDP preference URIs to omit.

        Returns:
            This builder.

        Example:
            ```python
            builder.prefer_representation(
                include_uris=["http://www.w3.org/ns/ldp#PreferMinimalContainer"],
                omit_uris=["http://fedora.info/definitions/v4/repository#ServerManaged"],
            )
            # Prefer: return=representation;
            #   include="http://www.w3.org/ns/ldp#PreferMinimalContainer";
            #   omit="http://fedora.info/definitions/v4/repository#ServerManaged"
            ```
        """
        self._check_configuring()
        parts = [PREFER_REPRESENTATION]
        include = " ".join(str(u) for u in include_uris or ())
        if include:
            parts.append(f'include="{include}"')
        omit = " ".join(str(u) for u in omit_uris or ())
        if omit:
            parts.append(f'omit="{omit}"')
        self.spec.prefer = "; ".join(parts)
        return self

    def range(self, first_byte: int | None = None, last_byte: int | None = None):
        """Request a byte range of a binary.

        Either bound may be omitted for an open range (`bytes=100-`,
        `bytes=-500`).

        Raises:
            ValueError: If both bounds are None.
        """
        self._check_configuring()
        if first_byte is None and last_byte is None:
            raise ValueError("range requires a first or last byte")
        first = "" if first_byte is None else str(first_byte)
        last = "" if last_byte is None else str(last_byte)
        self.spec.range = f"bytes={first}-{last}"
        return self

    def disable_redirects(self):
        """Return 3xx responses instead of following them."""
        self._check_configuring()
        self.spec.follow_redirects = False
        return self
