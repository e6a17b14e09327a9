"""
Tests for fcrepo.builders package.

Tests request assembly including:
- Method and URI binding for every builder
- Body handling and default content types
- Digest, conditional, Slug and Content-Disposition headers
- GET negotiation and Prefer/Range headers
- Single-use builder lifecycle
"""

from __future__ import annotations

import io

import pytest

from fcrepo.builders import (
    BuilderState,
    DeleteBuilder,
    GetBuilder,
    HeadBuilder,
    OptionsBuilder,
    PatchBuilder,
    PostBuilder,
    PutBuilder,
)
from fcrepo.exceptions import FcrepoOperationFailedError, RequestStateError
from fcrepo.logging import DefaultLogger, set_global_logger

ALL_BUILDERS = [
    (GetBuilder, "GET"),
    (HeadBuilder, "HEAD"),
    (OptionsBuilder, "OPTIONS"),
    (DeleteBuilder, "DELETE"),
    (PostBuilder, "POST"),
    (PutBuilder, "PUT"),
    (PatchBuilder, "PATCH"),
]


class TestCreateRequest:
    """Tests for method and URI binding."""

    @pytest.mark.parametrize("builder_cls,method", ALL_BUILDERS)
    def test_method_and_uri(self, builder_cls, method, repo_uri, recording_client):
        """Test that each builder creates a request for its verb and URI."""
        request = builder_cls(repo_uri, recording_client).create_request()

        assert request.method == method
        assert request.url == repo_uri

    @pytest.mark.parametrize("builder_cls,method", ALL_BUILDERS)
    def test_perform_sends_to_target(
        self, builder_cls, method, repo_uri, recording_client
    ):
        """Test that perform() hands the request and URI to the client."""
        result = builder_cls(repo_uri, recording_client).perform()

        assert result == "response"
        uri, request, allow_redirects = recording_client.calls[0]
        assert uri == repo_uri
        assert request.method == method
        assert allow_redirects is True

    def test_empty_uri_rejected(self, recording_client):
        with pytest.raises(ValueError, match="target URI"):
            HeadBuilder("", recording_client)


class TestBody:
    """Tests for body attachment on POST, PUT and PATCH."""

    @pytest.mark.parametrize("builder_cls", [PostBuilder, PutBuilder])
    def test_default_content_type(self, builder_cls, repo_uri, recording_client):
        """Test that a body without a type is sent as octet-stream."""
        stream = io.BytesIO(b"hello")
        builder_cls(repo_uri, recording_client).body(stream).perform()

        request = recording_client.last_request
        assert request.data is stream
        assert request.headers["Content-Type"] == "application/octet-stream"

    @pytest.mark.parametrize("builder_cls", [PostBuilder, PutBuilder, PatchBuilder])
    def test_explicit_content_type(self, builder_cls, repo_uri, recording_client):
        builder_cls(repo_uri, recording_client).body(
            io.BytesIO(b"hello"), "text/plain"
        ).perform()

        assert recording_client.last_request.headers["Content-Type"] == "text/plain"

    def test_none_content_type_falls_back(self, repo_uri, recording_client):
        PutBuilder(repo_uri, recording_client).body(io.BytesIO(b"x"), None).perform()

        headers = recording_client.last_request.headers
        assert headers["Content-Type"] == "application/octet-stream"

    def test_patch_defaults_to_sparql_update(self, repo_uri, recording_client):
        """Test that PATCH bodies default to application/sparql-update."""
        PatchBuilder(repo_uri, recording_client).body(io.BytesIO(b"INSERT {}")).perform()

        headers = recording_client.last_request.headers
        assert headers["Content-Type"] == "application/sparql-update"

    def test_empty_content_type_is_kept(self, repo_uri, recording_client):
        """Test that only None selects the default content type."""
        PutBuilder(repo_uri, recording_client).body(io.BytesIO(b"x"), "").perform()

        assert recording_client.last_request.headers["Content-Type"] == ""

    def test_body_from_file(self, tmp_test_dir, repo_uri, reading_client):
        """Test that a path body is opened, streamed and closed after sending."""
        path = tmp_test_dir / "data.txt"
        path.write_bytes(b"file content")

        PutBuilder(repo_uri, reading_client).body(path, "text/plain").perform()

        assert reading_client.sent_body == b"file content"
        assert reading_client.last_request.data.closed

    def test_file_closed_when_send_fails(self, tmp_test_dir, repo_uri, failing_client):
        """Test that a path body is closed even if the transport fails."""
        path = tmp_test_dir / "data.txt"
        path.write_bytes(b"file content")
        builder = PostBuilder(repo_uri, failing_client).body(path)
        stream = builder.spec.body

        with pytest.raises(FcrepoOperationFailedError):
            builder.perform()

        assert stream.closed

    def test_caller_stream_left_open(self, repo_uri, recording_client):
        """Test that a stream supplied by the caller is not closed."""
        stream = io.BytesIO(b"hello")

        PutBuilder(repo_uri, recording_client).body(stream).perform()

        assert not stream.closed

    def test_replaced_file_body_is_closed(
        self, tmp_test_dir, repo_uri, recording_client
    ):
        """Test that a file opened from a path is closed when replaced."""
        path = tmp_test_dir / "data.txt"
        path.write_bytes(b"file content")
        builder = PutBuilder(repo_uri, recording_client).body(path)
        opened = builder.spec.body

        builder.body(io.BytesIO(b"replacement"))

        assert opened.closed

    def test_missing_file_leaves_builder_unchanged(
        self, tmp_test_dir, repo_uri, recording_client
    ):
        """Test that an unopenable file raises and sets no body."""
        builder = PostBuilder(repo_uri, recording_client)

        with pytest.raises(FileNotFoundError):
            builder.body(tmp_test_dir / "missing.bin", "image/png")

        assert builder.spec.body is None
        assert builder.spec.content_type is None

    def test_second_body_replaces_first(self, repo_uri, recording_client):
        first = io.BytesIO(b"first")
        second = io.BytesIO(b"second")

        PostBuilder(repo_uri, recording_client).body(first, "text/plain").body(
            second
        ).perform()

        request = recording_client.last_request
        assert request.data is second
        assert request.headers["Content-Type"] == "application/octet-stream"


class TestWriteHeaders:
    """Tests for digest and conditional headers."""

    def test_digest_header(self, repo_uri, recording_client):
        """Test that digests are sent with the sha1= prefix."""
        PostBuilder(repo_uri, recording_client).digest("abc123").perform()

        assert recording_client.last_request.headers["Digest"] == "sha1=abc123"

    def test_no_conditional_headers_by_default(self, repo_uri, recording_client):
        PutBuilder(repo_uri, recording_client).body(io.BytesIO(b"x")).perform()

        headers = recording_client.last_request.headers
        assert "If-Match" not in headers
        assert "If-Unmodified-Since" not in headers
        assert "Digest" not in headers

    def test_conditional_headers(self, repo_uri, recording_client):
        PutBuilder(repo_uri, recording_client).if_match('"etag-1"').if_unmodified_since(
            "Mon, 01 Jan 2024 00:00:00 GMT"
        ).perform()

        headers = recording_client.last_request.headers
        assert headers["If-Match"] == '"etag-1"'
        assert headers["If-Unmodified-Since"] == "Mon, 01 Jan 2024 00:00:00 GMT"

    def test_last_setter_call_wins(self, repo_uri, recording_client):
        """Test that setting a field twice keeps only the last value."""
        builder = PostBuilder(repo_uri, recording_client)
        builder.digest("first").digest("second")
        builder.slug("one").slug("two")
        builder.filename("a.txt").filename("b.txt")
        builder.perform()

        headers = recording_client.last_request.headers
        assert headers["Digest"] == "sha1=second"
        assert headers["Slug"] == "two"
        assert headers["Content-Disposition"] == 'attachment; filename="b.txt"'

    def test_put_prefer_lenient(self, repo_uri, recording_client):
        PutBuilder(repo_uri, recording_client).prefer_lenient().perform()

        headers = recording_client.last_request.headers
        assert headers["Prefer"] == 'handling=lenient; received="minimal"'


class TestPostBuilder:
    """Tests for POST-specific headers."""

    def test_filename_is_url_encoded(self, repo_uri, recording_client):
        PostBuilder(repo_uri, recording_client).filename("my file.txt").perform()

        headers = recording_client.last_request.headers
        assert headers["Content-Disposition"] == 'attachment; filename="my+file.txt"'

    def test_none_filename_and_slug_are_no_ops(self, repo_uri, recording_client):
        PostBuilder(repo_uri, recording_client).filename(None).slug(None).perform()

        headers = recording_client.last_request.headers
        assert "Content-Disposition" not in headers
        assert "Slug" not in headers

    def test_unencodable_filename_raises(self, repo_uri, recording_client):
        """Test that encoder failures surface at configuration time."""
        builder = PostBuilder(repo_uri, recording_client)

        with pytest.raises(FcrepoOperationFailedError) as exc_info:
            builder.filename("\udc80.bin")

        assert exc_info.value.status_code == -1
        assert exc_info.value.url == repo_uri
        assert builder.spec.content_disposition is None

    def test_end_to_end_upload(self, repo_uri, recording_client):
        """Test a complete binary upload request."""
        stream = io.BytesIO(b"\x89PNG")

        PostBuilder(repo_uri, recording_client).body(stream, "image/png").slug(
            "photo1"
        ).filename("cat.png").perform()

        uri, request, _ = recording_client.calls[0]
        assert uri == repo_uri
        assert request.method == "POST"
        assert request.url == repo_uri
        assert request.data is stream
        assert request.headers == {
            "Content-Type": "image/png",
            "Slug": "photo1",
            "Content-Disposition": 'attachment; filename="cat.png"',
        }


class TestBodylessBuilders:
    """Tests that DELETE, HEAD and OPTIONS never enclose a body."""

    @pytest.mark.parametrize("builder_cls", [DeleteBuilder, HeadBuilder, OptionsBuilder])
    def test_body_state_is_ignored(self, builder_cls, repo_uri, recording_client):
        builder = builder_cls(repo_uri, recording_client)
        builder.spec.body = io.BytesIO(b"should not be sent")
        builder.spec.content_type = "text/plain"
        builder.perform()

        request = recording_client.last_request
        assert not request.data
        assert request.headers == {}

    def test_bodyless_builders_have_no_body_setter(self, repo_uri, recording_client):
        assert not hasattr(DeleteBuilder(repo_uri, recording_client), "body")
        assert not hasattr(HeadBuilder(repo_uri, recording_client), "body")


class TestGetBuilder:
    """Tests for GET negotiation and caching headers."""

    def test_accept_and_conditional_headers(self, repo_uri, recording_client):
        GetBuilder(repo_uri, recording_client).accept("text/turtle").if_none_match(
            '"v1"'
        ).if_modified_since("Mon, 01 Jan 2024 00:00:00 GMT").perform()

        assert recording_client.last_request.headers == {
            "Accept": "text/turtle",
            "If-None-Match": '"v1"',
            "If-Modified-Since": "Mon, 01 Jan 2024 00:00:00 GMT",
        }

    def test_prefer_minimal(self, repo_uri, recording_client):
        GetBuilder(repo_uri, recording_client).prefer_minimal().perform()

        assert recording_client.last_request.headers["Prefer"] == "return=minimal"

    def test_prefer_representation(self, repo_uri, recording_client):
        include = ["http://www.w3.org/ns/ldp#PreferMinimalContainer"]
        omit = [
            "http://fedora.info/definitions/v4/repository#ServerManaged",
            "http://www.w3.org/ns/ldp#PreferContainment",
        ]

        GetBuilder(repo_uri, recording_client).prefer_representation(
            include, omit
        ).perform()

        assert recording_client.last_request.headers["Prefer"] == (
            "return=representation; "
            'include="http://www.w3.org/ns/ldp#PreferMinimalContainer"; '
            'omit="http://fedora.info/definitions/v4/repository#ServerManaged '
            'http://www.w3.org/ns/ldp#PreferContainment"'
        )

    def test_prefer_representation_without_uris(self, repo_uri, recording_client):
        GetBuilder(repo_uri, recording_client).prefer_representation().perform()

        headers = recording_client.last_request.headers
        assert headers["Prefer"] == "return=representation"

    @pytest.mark.parametrize(
        "first,last,expected",
        [(0, 99, "bytes=0-99"), (100, None, "bytes=100-"), (None, 500, "bytes=-500")],
    )
    def test_range(self, first, last, expected, repo_uri, recording_client):
        GetBuilder(repo_uri, recording_client).range(first, last).perform()

        assert recording_client.last_request.headers["Range"] == expected

    def test_range_requires_a_bound(self, repo_uri, recording_client):
        with pytest.raises(ValueError, match="first or last byte"):
            GetBuilder(repo_uri, recording_client).range()

    def test_disable_redirects(self, repo_uri, recording_client):
        GetBuilder(repo_uri, recording_client).disable_redirects().perform()

        _, _, allow_redirects = recording_client.calls[0]
        assert allow_redirects is False


class TestLifecycle:
    """Tests for the configuring/sent builder states."""

    def test_perform_marks_sent(self, repo_uri, recording_client):
        builder = HeadBuilder(repo_uri, recording_client)
        assert builder.state is BuilderState.CONFIGURING

        builder.perform()

        assert builder.state is BuilderState.SENT

    def test_second_perform_rejected(self, repo_uri, recording_client):
        builder = DeleteBuilder(repo_uri, recording_client)
        builder.perform()

        with pytest.raises(RequestStateError, match="already sent"):
            builder.perform()
        assert len(recording_client.calls) == 1

    def test_setters_rejected_after_send(self, repo_uri, recording_client):
        builder = PostBuilder(repo_uri, recording_client)
        builder.perform()

        with pytest.raises(RequestStateError):
            builder.slug("late")
        with pytest.raises(RequestStateError):
            builder.body(io.BytesIO(b"late"))


class TestLogging:
    """Tests for request header logging."""

    def test_debug_logs_request_headers(self, repo_uri, recording_client, capsys):
        set_global_logger(DefaultLogger(debug=True))

        PostBuilder(repo_uri, recording_client).slug("photo1").perform()

        err = capsys.readouterr().err
        assert f"[HTTP] POST {repo_uri}" in err
        assert "[HTTP] POST request headers: {'Slug': 'photo1'}" in err

    def test_verbose_logs_request_line_only(self, repo_uri, recording_client, capsys):
        set_global_logger(DefaultLogger(verbose=True))

        PostBuilder(repo_uri, recording_client).slug("photo1").perform()

        err = capsys.readouterr().err
        assert err == f"[HTTP] POST {repo_uri}\n"

    def test_silent_by_default(self, repo_uri, recording_client, capsys):
        PostBuilder(repo_uri, recording_client).slug("photo1").perform()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
