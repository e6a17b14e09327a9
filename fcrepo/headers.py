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

"""Header names and fixed header values used by the repository API."""

from __future__ import annotations

ACCEPT = "Accept"
CONTENT_TYPE = "Content-Type"
CONTENT_DISPOSITION = "Content-Disposition"
DIGEST = "Digest"
ETAG = "ETag"
IF_MATCH = "If-Match"
IF_MODIFIED_SINCE = "If-Modified-Since"
IF_NONE_MATCH = "If-None-Match"
IF_UNMODIFIED_SINCE = "If-Unmodified-Since"
LAST_MODIFIED = "Last-Modified"
LINK = "Link"
LOCATION = "Location"
PREFER = "Prefer"
RANGE = "Range"
SLUG = "Slug"

DEFAULT_CONTENT_TYPE = "application/octet-stream"
SPARQL_UPDATE = "application/sparql-update"

# The repository only verifies SHA-1 digests supplied on upload.
DIGEST_ALGORITHM = "sha1"
