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

"""Request builder base classes.

This module defines the two classes every verb builder derives from:

- RequestBuilder: owns the target URI, the client and the RequestSpec, and
    runs the create -> populate -> execute sequence in perform()
- BodyRequestBuilder: adds the request body and the conditional and digest
    headers shared by the write operations (POST, PUT, PATCH)

Builders have two states. While CONFIGURING, setters may be called any
number of times in any order; the last call for a field wins. perform()
moves the builder to SENT, after which every setter and perform() itself
raise RequestStateError.

Example:
    A verb builder only picks its method and adds extra setters:
        ```python
        from fcrepo.builders.base import BodyRequestBuilder
        from fcrepo.methods import HttpMethod

        class PutBuilder(BodyRequestBuilder):
            method = HttpMethod.PUT
        ```

Note:
    A stream passed to body() belongs to the caller and is never closed by
    the builder. When body() is given a path, the builder opens the file
    itself and closes it once perform() returns or raises. A builder that is
    never sent leaves such a file open.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
import os
from typing import IO, TYPE_CHECKING

import requests

from fcrepo import headers as h
from fcrepo.exceptions import RequestStateError
from fcrepo.logging import get_global_logger
from fcrepo.methods import HttpMethod
from fcrepo.request_spec import RequestSpec, apply_request_spec, format_http_date

if TYPE_CHECKING:
    from fcrepo.client import FcrepoClient
    from fcrepo.response import FcrepoResponse


class BuilderState(Enum):
    """Lifecycle state of a request builder."""

    CONFIGURING = "configuring"
    SENT = "sent"


class RequestBuilder:
    """Base builder for a single request against one repository resource.

    Subclasses set the class attribute `method` and override
    populate_request() when they have headers to attach.

    Attributes:
        method: HTTP method issued by this builder type.
        target_uri: URI the request is issued to.
        spec: Accumulated request configuration.
        state: Current lifecycle state.
    """

    method: HttpMethod

    def __init__(self, uri: str, client: FcrepoClient) -> None:
        """Instantiate builder.

        Args:
            uri: URI the request will be issued to.
            client: Client that executes the request.

        Raises:
            ValueError: If uri is empty.
        """
        if not uri:
            raise ValueError("request builder requires a target URI")
        self._client = client
        self.spec = RequestSpec(target_uri=str(uri), method=self.method)
        self.state = BuilderState.CONFIGURING
        # Body file opened by body(path); closed after perform()
        self._owned_body: IO[bytes] | None = None

    @property
    def target_uri(self) -> str:
        return self.spec.target_uri

    def _check_configuring(self) -> None:
        if self.state is BuilderState.SENT:
            raise RequestStateError(
                f"{self.method.value} request to {self.target_uri} was already sent"
            )

    def create_request(self) -> requests.Request:
        """Create the transport request for this builder's method and URI."""
        return self.method.create_request(self.target_uri)

    def populate_request(self, request: requests.Request) -> None:
        """Attach headers and body to request before it is sent (no-op here)."""

    def _apply_spec(self, request: requests.Request) -> None:
        apply_request_spec(request, self.spec)
        get_global_logger().debug(
            "HTTP", f"{self.method.value} request headers: {dict(request.headers)}"
        )

    def perform(self) -> FcrepoResponse:
        """Build the request and execute it through the client.

        Returns:
            The repository response.

        Raises:
            RequestStateError: If this builder was already performed.
            FcrepoOperationFailedError: If the transport fails, or the
                repository returns an error status and the client is set to
                throw on failure.
        """
        self._check_configuring()
        request = self.create_request()
        self.populate_request(request)
        self.state = BuilderState.SENT

        get_global_logger().verbose("HTTP", f"{self.method.value} {self.target_uri}")
        try:
            return self._client.execute_request(
                self.target_uri, request, allow_redirects=self.spec.follow_redirects
            )
        finally:
            if self._owned_body is not None:
                self._owned_body.close()
                self._owned_body = None


class BodyRequestBuilder(RequestBuilder):
    """Builder for requests that may enclose a body.

    Adds body(), digest(), if_match() and if_unmodified_since(). The body's
    content type falls back to `default_content_type` when not given.
    """

    default_content_type: str = h.DEFAULT_CONTENT_TYPE

    def populate_request(self, request: requests.Request) -> None:
        self._apply_spec(request)

    def body(
        self, source: IO[bytes] | str | os.PathLike[str], content_type: str | None = None
    ):
        """Add a body to this request.

        Args:
            source: Binary stream of the content, or a path to a file whose
                content is sent. Replaces any previously set body. A file
                opened from a path is closed after perform(); a stream is
                left to the caller.
            content_type: Content-Type of the body. None selects the builder
                default (application/octet-stream for most verbs).

        Returns:
            This builder.

        Raises:
            OSError: If source is a path that cannot be opened. The builder
                is left unchanged.
        """
        self._check_configuring()
        owned = None
        if isinstance(source, (str, os.PathLike)):
            source = owned = open(source, "rb")

        if self._owned_body is not None:
            self._owned_body.close()
        self._owned_body = owned
        self.spec.body = source
        self.spec.content_type = (
            content_type if content_type is not None else self.default_content_type
        )
        return self

    def digest(self, value: str | None):
        """Provide a SHA-1 checksum of the body, sent as `Digest: sha1=<value>`."""
        self._check_configuring()
        self.spec.digest = value
        return self

    def if_match(self, etag: str | None):
        """Only apply the request if the resource still has this ETag."""
        self._check_configuring()
        self.spec.etag = etag
        return self

    def if_unmodified_since(self, modified: str | datetime | None):
        """Only apply the request if the resource is unmodified since this date.

        Args:
            modified: HTTP-date string (as returned in Last-Modified) or a
                datetime. None clears the precondition.

        Returns:
            This builder.
        """
        self._check_configuring()
        self.spec.unmodified_since = (
            format_http_date(modified) if modified is not None else None
        )
        return self
