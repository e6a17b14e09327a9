"""
fcrepo - Fedora Commons repository client

A fluent request-builder client for the Fedora repository HTTP API. Each
repository operation is assembled by a builder and sent with perform():

    from fcrepo import FcrepoClient

    client = FcrepoClient("fedoraAdmin", "secret")
    response = (
        client.post("http://localhost:8080/rest/photos")
        .body(open("cat.png", "rb"), "image/png")
        .slug("photo1")
        .filename("cat.png")
        .perform()
    )
    print(response.status_code, response.location)

Package Structure
-----------------
client : module
    FcrepoClient, session construction and request execution.
builders : package
    One request builder per HTTP method.
request_spec : module
    Request state and header rendering shared by all builders.
response : module
    FcrepoResponse wrapper.
config : package
    YAML/environment configuration loading.
cli : module
    Command-line interface (`fcrepo get|head|options|delete|post|put|patch`).

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Fluent request-builder client for the Fedora repository API"

# Re-export commonly used names for convenience
from fcrepo.builders import (
    DeleteBuilder,
    GetBuilder,
    HeadBuilder,
    OptionsBuilder,
    PatchBuilder,
    PostBuilder,
    PutBuilder,
)
from fcrepo.client import FcrepoClient
from fcrepo.config import ClientConfig, load_client_config
from fcrepo.exceptions import (
    ConfigError,
    FcrepoError,
    FcrepoOperationFailedError,
    RequestStateError,
)
from fcrepo.methods import HttpMethod
from fcrepo.response import FcrepoResponse

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "ClientConfig",
    "ConfigError",
    "DeleteBuilder",
    "FcrepoClient",
    "FcrepoError",
    "FcrepoOperationFailedError",
    "FcrepoResponse",
    "GetBuilder",
    "HeadBuilder",
    "HttpMethod",
    "OptionsBuilder",
    "PatchBuilder",
    "PostBuilder",
    "PutBuilder",
    "RequestStateError",
    "load_client_config",
]
