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

"""Exception hierarchy for the Fedora repository client.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors. All exceptions inherit from
FcrepoError, allowing users to catch all client errors with a single except
clause if needed.

Example:
    Catching a failed operation:
        ```python
        from fcrepo import FcrepoClient
        from fcrepo.exceptions import FcrepoOperationFailedError

        client = FcrepoClient(throw_exception_on_failure=True)
        try:
            client.delete("http://localhost:8080/rest/missing").perform()
        except FcrepoOperationFailedError as e:
            print(f"{e.url} failed with {e.status_code}: {e.status_text}")
        ```

    Catching all client errors:
        ```python
        from fcrepo.exceptions import FcrepoError

        try:
            response = client.get(uri).perform()
        except FcrepoError as e:
            print(f"fcrepo error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "FcrepoError",
    "ConfigError",
    "FcrepoOperationFailedError",
    "RequestStateError",
]


class FcrepoError(Exception):
    """Base exception for all fcrepo client errors.

    All client-specific exceptions inherit from this class, allowing users
    to catch all client errors with a single except clause if needed.
    """

    pass


class ConfigError(FcrepoError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parse errors (syntax errors, empty files, non-mapping documents)
    - Unknown configuration keys in the `client` section
    - Environment variables that cannot be converted to the expected type
        (e.g., FCREPO_TIMEOUT=abc)

    Example:
        Catching configuration errors:
            ```python
            from fcrepo.config import load_client_config
            from fcrepo.exceptions import ConfigError

            try:
                config = load_client_config(Path("fcrepo.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class FcrepoOperationFailedError(FcrepoError):
    """Raised when a repository operation could not be completed.

    This exception is raised when:

    - A header value cannot be encoded while a request is being configured
        (status_code is -1)
    - The transport fails before a response is received (connection refused,
        timeouts, TLS errors; status_code is -1)
    - The repository answers with a status >= 400 and the client was created
        with throw_exception_on_failure=True

    Attributes:
        url: Target URI of the failed operation.
        status_code: HTTP status returned by the repository, or -1 when no
            response was received.
        status_text: Reason phrase or underlying error message.
    """

    def __init__(self, url: str, status_code: int, status_text: str) -> None:
        self.url = url
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(
            f"HTTP operation failed invoking {url} with statusCode: "
            f"{status_code} and message: {status_text}"
        )


class RequestStateError(FcrepoError):
    """Raised when a request builder is used after its request was sent.

    Builders are single-use: once perform() has been called, further
    configuration or a second perform() is rejected.
    """

    pass
