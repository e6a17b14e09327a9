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

"""Command-line interface for the fcrepo client.

This module provides the `fcrepo` console script, a thin shell over the
request builders for poking at a repository from a terminal.

Commands:

    get: Retrieve a resource (optionally saving the body to a file)
    head: Show the headers of a resource
    options: Show the methods a resource supports
    delete: Delete a resource
    post: Create a child resource in a container
    put: Create or replace a resource at a known URI
    patch: Apply a SPARQL Update to a resource

Example:
    Upload a binary:
        ```bash
        $ fcrepo post http://localhost:8080/rest/photos \\
            --file cat.png --content-type image/png --slug photo1 --filename cat.png
        ```

    Fetch Turtle with request headers shown:
        ```bash
        $ fcrepo --debug get http://localhost:8080/rest/photos --accept text/turtle
        ```

Exit Codes:

- 0: Success (response status < 400)
- 1: Error (status >= 400, configuration, transport, or file error)

Note:
    Credentials and client settings come from --config and FCREPO_*
    environment variables (see fcrepo.config). Diagnostics go to stderr;
    response status and headers go to stdout.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
import sys

from fcrepo import __version__
from fcrepo.client import FcrepoClient
from fcrepo.config import load_client_config
from fcrepo.exceptions import ConfigError, FcrepoError, FcrepoOperationFailedError
from fcrepo.logging import get_logger, set_global_logger
from fcrepo.response import FcrepoResponse


def _make_client(args: argparse.Namespace) -> FcrepoClient:
    config_path = Path(args.config) if args.config else None
    return FcrepoClient.from_config(load_client_config(config_path))


def _print_response(response: FcrepoResponse) -> None:
    print(f"HTTP {response.status_code} {response.url}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")


def _run(
    args: argparse.Namespace,
    perform: Callable[[FcrepoClient, ExitStack], FcrepoResponse],
) -> int:
    """Runs one request and reports the result.

    Args:
        args: Parsed command-line arguments.
        perform: Builds and performs the request. Files it opens are
            registered on the ExitStack so they are closed afterwards.

    Returns:
        Exit code (0 for status < 400, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        with _make_client(args) as client, ExitStack() as stack:
            response = perform(client, stack)
            with response:
                _print_response(response)
                if getattr(args, "output", None) and response.status_code < 400:
                    output = Path(args.output)
                    output.write_bytes(response.read())
                    print(f"Body written to: {output}", file=sys.stderr)
    except (ConfigError, FcrepoOperationFailedError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1
    except FcrepoError as err:
        # Catch any other client errors we might have missed
        print(f"Error: {err}", file=sys.stderr)
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    return 0 if response.status_code < 400 else 1


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo get'."""

    def perform(client: FcrepoClient, stack: ExitStack) -> FcrepoResponse:
        builder = client.get(args.uri).accept(args.accept)
        builder.if_none_match(args.if_none_match)
        builder.if_modified_since(args.if_modified_since)
        if args.prefer_minimal:
            builder.prefer_minimal()
        if args.no_redirects:
            builder.disable_redirects()
        return builder.perform()

    return _run(args, perform)


def cmd_head(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo head'."""
    return _run(args, lambda client, stack: client.head(args.uri).perform())


def cmd_options(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo options'."""
    return _run(args, lambda client, stack: client.options(args.uri).perform())


def cmd_delete(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo delete'."""
    return _run(args, lambda client, stack: client.delete(args.uri).perform())


def cmd_post(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo post'."""

    def perform(client: FcrepoClient, stack: ExitStack) -> FcrepoResponse:
        builder = client.post(args.uri)
        if args.file:
            builder.body(stack.enter_context(open(args.file, "rb")), args.content_type)
        builder.digest(args.digest).slug(args.slug).filename(args.filename)
        return builder.perform()

    return _run(args, perform)


def cmd_put(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo put'."""

    def perform(client: FcrepoClient, stack: ExitStack) -> FcrepoResponse:
        builder = client.put(args.uri)
        if args.file:
            builder.body(stack.enter_context(open(args.file, "rb")), args.content_type)
        builder.digest(args.digest).filename(args.filename)
        builder.if_match(args.if_match).if_unmodified_since(args.if_unmodified_since)
        if args.lenient:
            builder.prefer_lenient()
        return builder.perform()

    return _run(args, perform)


def cmd_patch(args: argparse.Namespace) -> int:
    """Handler for 'fcrepo patch'."""

    def perform(client: FcrepoClient, stack: ExitStack) -> FcrepoResponse:
        builder = client.patch(args.uri)
        builder.body(stack.enter_context(open(args.file, "rb")))
        builder.if_match(args.if_match).if_unmodified_since(args.if_unmodified_since)
        return builder.perform()

    return _run(args, perform)


def _add_conditional_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--if-match", help="Only apply if the resource has this ETag")
    parser.add_argument(
        "--if-unmodified-since",
        help="Only apply if the resource is unmodified since this HTTP-date",
    )


def _add_body_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--file", help="File to send as the request body")
    parser.add_argument(
        "--content-type",
        default=None,
        help="Content-Type of the body (default: application/octet-stream)",
    )
    parser.add_argument("--digest", help="SHA-1 checksum of the body")
    parser.add_argument("--filename", help="Filename for the Content-Disposition header")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the fcrepo CLI."""
    parser = argparse.ArgumentParser(
        prog="fcrepo",
        description="Issue requests against a Fedora repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"fcrepo {__version__}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with a 'client' section (credentials, timeout, ...)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show request method, URI and response status",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show request headers and configuration (implies --verbose)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'get' command
    parser_get = subparsers.add_parser("get", help="Retrieve a resource")
    parser_get.add_argument("uri", help="Resource URI")
    parser_get.add_argument("--accept", help="Media type to request")
    parser_get.add_argument("--if-none-match", help="ETag of a cached copy")
    parser_get.add_argument(
        "--if-modified-since", help="HTTP-date of a cached copy"
    )
    parser_get.add_argument(
        "--prefer-minimal",
        action="store_true",
        help="Request a minimal RDF representation",
    )
    parser_get.add_argument(
        "--no-redirects",
        action="store_true",
        help="Do not follow redirects (external content)",
    )
    parser_get.add_argument("-o", "--output", help="Write the body to this file")
    parser_get.set_defaults(func=cmd_get)

    # 'head', 'options' and 'delete' commands
    for name, handler, help_text in (
        ("head", cmd_head, "Show the headers of a resource"),
        ("options", cmd_options, "Show the methods a resource supports"),
        ("delete", cmd_delete, "Delete a resource"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("uri", help="Resource URI")
        sub.set_defaults(func=handler)

    # 'post' command
    parser_post = subparsers.add_parser(
        "post", help="Create a child resource in a container"
    )
    parser_post.add_argument("uri", help="Container URI")
    _add_body_args(parser_post)
    parser_post.add_argument("--slug", help="Suggested name for the new resource")
    parser_post.set_defaults(func=cmd_post)

    # 'put' command
    parser_put = subparsers.add_parser(
        "put", help="Create or replace a resource at a known URI"
    )
    parser_put.add_argument("uri", help="Resource URI")
    _add_body_args(parser_put)
    _add_conditional_args(parser_put)
    parser_put.add_argument(
        "--lenient",
        action="store_true",
        help="Ignore server-managed triples when replacing RDF",
    )
    parser_put.set_defaults(func=cmd_put)

    # 'patch' command
    parser_patch = subparsers.add_parser(
        "patch", help="Apply a SPARQL Update to a resource"
    )
    parser_patch.add_argument("uri", help="Resource URI")
    parser_patch.add_argument(
        "--file", required=True, help="File containing the SPARQL Update"
    )
    _add_conditional_args(parser_patch)
    parser_patch.set_defaults(func=cmd_patch)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the fcrepo CLI.

    This function is registered as the 'fcrepo' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
