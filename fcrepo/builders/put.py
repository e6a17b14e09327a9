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

"""Builder for PUT requests that create or replace a resource at a known URI."""

from __future__ import annotations

from fcrepo.builders.base import BodyRequestBuilder
from fcrepo.methods import HttpMethod
from fcrepo.request_spec import content_disposition

PREFER_LENIENT = 'handling=lenient; received="minimal"'


class PutBuilder(BodyRequestBuilder):
    """Builds a PUT request.

    Besides the shared body, digest and conditional headers, PUT can name the
    uploaded file and ask the repository to ignore server-managed triples
    when replacing RDF.
    """

    method = HttpMethod.PUT

    def filename(self, filename: str | None):
        """Provide a Content-Disposition header naming the uploaded file.

        Raises:
            FcrepoOperationFailedError: If the filename cannot be encoded.
        """
        self._check_configuring()
        if filename is not None:
            self.spec.content_disposition = content_disposition(
                filename, self.target_uri
            )
        return self

    def prefer_lenient(self):
        """Ask the repository to leniently handle server-managed triples."""
        self._check_configuring()
        self.spec.prefer = PREFER_LENIENT
        return self
