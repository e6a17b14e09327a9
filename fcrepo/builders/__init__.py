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

"""Fluent request builders, one per repository HTTP method.

Builders are normally obtained from FcrepoClient (client.get(uri),
client.post(uri), ...) rather than constructed directly.

Modules:

base : module
    RequestBuilder and BodyRequestBuilder, plus the BuilderState lifecycle.
get, head, options, delete : modules
    Builders for requests without a body.
post, put, patch : modules
    Builders for requests enclosing a body.

Example:
    ```python
    from fcrepo import FcrepoClient

    client = FcrepoClient("fedoraAdmin", "secret")
    response = client.head("http://localhost:8080/rest/obj").perform()
    print(response.status_code)
    ```
"""

from .base import BodyRequestBuilder, BuilderState, RequestBuilder
from .delete import DeleteBuilder
from .get import GetBuilder
from .head import HeadBuilder
from .options import OptionsBuilder
from .patch import PatchBuilder
from .post import PostBuilder
from .put import PutBuilder

__all__ = [
    "BodyRequestBuilder",
    "BuilderState",
    "DeleteBuilder",
    "GetBuilder",
    "HeadBuilder",
    "OptionsBuilder",
    "PatchBuilder",
    "PostBuilder",
    "PutBuilder",
    "RequestBuilder",
]
