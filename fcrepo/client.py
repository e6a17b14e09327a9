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

"""HTTP client for the Fedora repository API.

FcrepoClient is the entry point of the library. It hands out one request
builder per HTTP method and executes the requests those builders assemble.

Key Features:

- **Retry Logic with Exponential Backoff** - Transient failures (429, 500,
    502, 503, 504) on GET, HEAD and OPTIONS are retried by a urllib3 Retry
    adapter. Requests with bodies are never retried since their stream has
    already been consumed.
- **Scoped Credentials** - Basic-auth credentials are only sent to the
    host named by auth_scope, when one is given.
- **Failure Policy** - By default every HTTP status is returned to the
    caller. With throw_exception_on_failure=True, statuses >= 400 raise
    FcrepoOperationFailedError.
- **Streaming** - Responses are streamed so large binaries are not buffered.

Example:
    Create a container child and read it back:

        ```python
        from fcrepo import FcrepoClient

        with FcrepoClient("fedoraAdmin", "secret", auth_scope="localhost") as client:
            created = client.post("http://localhost:8080/rest/").slug("books").perform()
            with client.get(created.location).accept("text/turtle").perform() as resp:
                print(resp.read().decode())
        ```

Notes:
- Timeouts are per-request (connect and read), not total transfer time
- Transport errors are chained to FcrepoOperationFailedError with status -1
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.auth import AuthBase, HTTPBasicAuth
from urllib3.util.retry import Retry

from fcrepo.builders import (
    DeleteBuilder,
    GetBuilder,
    HeadBuilder,
    OptionsBuilder,
    PatchBuilder,
    PostBuilder,
    PutBuilder,
)
from fcrepo.exceptions import FcrepoOperationFailedError
from fcrepo.logging import get_global_logger
from fcrepo.response import FcrepoResponse

if TYPE_CHECKING:
    from fcrepo.config import ClientConfig

DEFAULT_USER_AGENT = "fcrepo-client-python/0.1"
DEFAULT_TIMEOUT = 60.0
RETRY_STATUSES = (429, 500, 502, 503, 504)


def make_session(
    retries: int = 3,
    backoff_factor: float = 0.5,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """Create a requests.Session with retry/backoff defaults.

    - Retries on common transient status codes and connection errors.
    - Applies exponential backoff.
    - Only retries methods without a body (GET, HEAD, OPTIONS).

    Args:
        retries: Total retry attempts per request.
        backoff_factor: urllib3 backoff factor between attempts.
        user_agent: User-Agent header sent with every request.

    Returns:
        A configured session.
    """
    s = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=("GET", "HEAD", "OPTIONS"),
        raise_on_status=False,
    )
    s.headers.update({"User-Agent": user_agent})
    s.mount("http://", HTTPAdapter(max_retries=retry))
    s.mount("https://", HTTPAdapter(max_retries=retry))
    return s


class _WithheldAuth(AuthBase):
    """Sends no credentials.

    Set on requests outside auth_scope so requests does not fall back to
    ~/.netrc credentials for that host.
    """

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers.pop("Authorization", None)
        return r


class FcrepoClient:
    """Executes repository requests and creates request builders."""

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        *,
        auth_scope: str | None = None,
        throw_exception_on_failure: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = 3,
        backoff_factor: float = 0.5,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        """Create a client.

        Args:
            username: Basic-auth user. Credentials are only used when both
                username and password are given.
            password: Basic-auth password.
            auth_scope: Host (or host:port) credentials are limited to. None
                sends credentials to every host. Requests to other hosts carry
                no credentials, not even ones from ~/.netrc.
            throw_exception_on_failure: Raise FcrepoOperationFailedError for
                responses with status >= 400.
            timeout: Per-request timeout in seconds.
            retries: Retry attempts for transient failures.
            backoff_factor: Backoff factor between retries.
            user_agent: User-Agent header value.
            session: Pre-built session to use instead of make_session().
        """
        self._auth = (
            HTTPBasicAuth(username, password)
            if username is not None and password is not None
            else None
        )
        self.auth_scope = auth_scope
        self.throw_exception_on_failure = throw_exception_on_failure
        self.timeout = timeout
        self._session = session or make_session(retries, backoff_factor, user_agent)

    @classmethod
    def from_config(cls, config: ClientConfig) -> FcrepoClient:
        """Create a client from a loaded ClientConfig."""
        return cls(
            config.username,
            config.password,
            auth_scope=config.auth_scope,
            throw_exception_on_failure=config.throw_exception_on_failure,
            timeout=config.timeout,
            retries=config.retries,
            backoff_factor=config.backoff_factor,
            user_agent=config.user_agent,
        )

    def __enter__(self) -> FcrepoClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _auth_for(self, uri: str) -> AuthBase | None:
        if self._auth is None:
            return None
        if self.auth_scope is None:
            return self._auth
        parsed = urlparse(uri)
        if self.auth_scope in (parsed.hostname, parsed.netloc):
            return self._auth
        return _WithheldAuth()

    def execute_request(
        self, uri: str, request: requests.Request, *, allow_redirects: bool = True
    ) -> FcrepoResponse:
        """Send an assembled request and wrap the response.

        Args:
            uri: Target URI, reported in errors and on the response.
            request: Request populated by a builder.
            allow_redirects: Follow 3xx responses.

        Returns:
            The wrapped, streamed response.

        Raises:
            FcrepoOperationFailedError: On transport failure (status -1), or
                on status >= 400 when throw_exception_on_failure is set.
        """
        logger = get_global_logger()

        if request.auth is None:
            request.auth = self._auth_for(uri)
        prepared = self._session.prepare_request(request)
        settings = self._session.merge_environment_settings(
            prepared.url, {}, True, None, None
        )

        try:
            resp = self._session.send(
                prepared,
                timeout=self.timeout,
                allow_redirects=allow_redirects,
                **settings,
            )
        except requests.RequestException as err:
            logger.verbose("HTTP", f"{request.method} {uri} failed: {err}")
            raise FcrepoOperationFailedError(uri, -1, str(err)) from err

        logger.verbose("HTTP", f"Response: {resp.status_code} {resp.reason}")

        if self.throw_exception_on_failure and resp.status_code >= 400:
            resp.close()
            raise FcrepoOperationFailedError(uri, resp.status_code, resp.reason or "")

        return FcrepoResponse(uri, resp)

    def get(self, uri: str) -> GetBuilder:
        return GetBuilder(uri, self)

    def head(self, uri: str) -> HeadBuilder:
        return HeadBuilder(uri, self)

    def options(self, uri: str) -> OptionsBuilder:
        return OptionsBuilder(uri, self)

    def delete(self, uri: str) -> DeleteBuilder:
        return DeleteBuilder(uri, self)

    def post(self, uri: str) -> PostBuilder:
        return PostBuilder(uri, self)

    def put(self, uri: str) -> PutBuilder:
        return PutBuilder(uri, self)

    def patch(self, uri: str) -> PatchBuilder:
        return PatchBuilder(uri, self)
