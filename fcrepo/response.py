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

"""Response wrapper returned by FcrepoClient.execute_request().

The wrapper exposes what repository callers usually need from a response
(status, headers, Location, Link relations and the body stream) without
interpreting the body. Responses are streamed; close them, or use them as
a context manager, when the body is not read.

Example:
    ```python
    with client.get(uri).accept("text/turtle").perform() as response:
        described_by = response.link_headers("describedby")
        turtle = response.read()
    ```
"""

from __future__ import annotations

from typing import IO

import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import parse_header_links

from fcrepo import headers as h


class FcrepoResponse:
    """Status, headers and body of a repository response.

    Attributes:
        url: URI the request was issued to.
        status_code: HTTP status code.
        headers: Case-insensitive response headers.
    """

    def __init__(self, url: str, response: requests.Response) -> None:
        self.url = url
        self.status_code: int = response.status_code
        self.headers: CaseInsensitiveDict[str] = response.headers
        self._response = response

    def __repr__(self) -> str:
        return f"<FcrepoResponse [{self.status_code}] {self.url}>"

    def __enter__(self) -> FcrepoResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def body(self) -> IO[bytes]:
        """Raw body stream (undecoded)."""
        return self._response.raw

    @property
    def content_type(self) -> str | None:
        return self.header_value(h.CONTENT_TYPE)

    @property
    def location(self) -> str | None:
        """URI of a newly created resource (POST/PUT) or redirect target."""
        return self.header_value(h.LOCATION)

    def header_value(self, name: str) -> str | None:
        """Return a header value, or None when absent.

        Repeated headers are joined with ", " by the transport.
        """
        return self.headers.get(name)

    def link_headers(self, rel: str) -> list[str]:
        """Return the target URIs of all Link headers with relation rel."""
        value = self.header_value(h.LINK)
        if not value:
            return []
        return [
            link["url"]
            for link in parse_header_links(value)
            if rel in link.get("rel", "").split()
        ]

    def read(self) -> bytes:
        """Read and return the whole body."""
        return self._response.content

    def close(self) -> None:
        self._response.close()
