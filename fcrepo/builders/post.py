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

"""Builder for POST requests that create new resources in a container.

POST adds two headers to the shared body handling:

- Slug: a suggested name for the new child, which the repository may ignore
- Content-Disposition: the original filename of a binary upload

Example:
    Upload an image as a new binary child:
        ```python
        with open("cat.png", "rb") as stream:
            response = (
                client.post("http://localhost:8080/rest/photos")
                .body(stream, "image/png")
                .slug("photo1")
                .filename("cat.png")
                .perform()
            )
        print(response.location)
        ```
"""

from __future__ import annotations

from fcrepo.builders.base import BodyRequestBuilder
from fcrepo.methods import HttpMethod
from fcrepo.request_spec import content_disposition


class PostBuilder(BodyRequestBuilder):
    """Builds a POST request creating a new resource within an LDP container."""

    method = HttpMethod.POST

    def filename(self, filename: str | None):
        """Provide a Content-Disposition header naming the uploaded file.

        Args:
            filename: Name of the file in the request body. None is a no-op.

        Returns:
            This builder.

        Raises:
            FcrepoOperationFailedError: If the filename cannot be encoded.
        """
        self._check_configuring()
        if filename is not None:
            self.spec.content_disposition = content_disposition(
                filename, self.target_uri
            )
        return self

    def slug(self, slug: str | None):
        """Suggest a name for the new child resource. None is a no-op."""
        self._check_configuring()
        if slug is not None:
            self.spec.slug = slug
        return self
