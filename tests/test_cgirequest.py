import pytest

from slashlib.cgiapi import ApiType
from slashlib.cgirequest import (
    RequestInfo,
    env_to_http_header_name,
    hashbang_length,
    load_request_info,
)


# --- hashbang_length -------------------------------------------------------

@pytest.mark.parametrize(
    "line, rest",
    [
        (b"#!/usr/bin/slash\n", b"print 1"),
        (b"#!/usr/bin/slash\r\n", b"print 1"),
        (b"#!/usr/bin/slash\r", b"print 1"),
        (b"#!/x\n", b""),
    ],
)
def test_hashbang_length_counts_line_and_ending(line, rest):
    assert hashbang_length(line + rest) == len(line)


def test_hashbang_without_newline_is_zero():
    assert hashbang_length(b"#!/usr/bin/slash") == 0


@pytest.mark.parametrize("src", [b"", b"#!", b"#! /bin\n", b"print 1\n", b"#/!x\n"])
def test_non_hashbang_is_zero(src):
    assert hashbang_length(src) == 0


def test_hashbang_accepts_text():
    line = "#!/bin/slash\n"
    assert hashbang_length(line + "x") == len(line)


# --- env_to_http_header_name ----------------------------------------------

def test_header_name_example():
    assert env_to_http_header_name("USER_AGENT") == "User-Agent"


@pytest.mark.parametrize("name", ["HOST", "ACCEPT_LANGUAGE", "X_FORWARDED_FOR", "DNT"])
def test_header_name_roundtrips_case_insensitively(name):
    result = env_to_http_header_name(name)
    assert result.replace("-", "_").upper() == name
    assert result[0] == name[0]
    assert "_" not in result


def test_header_name_empty():
    assert env_to_http_header_name("") == ""


def test_header_name_trailing_underscore():
    assert env_to_http_header_name("AB_") == "Ab-"


# --- load_request_info -----------------------------------------------------

def test_collects_environment_and_fields():
    environ = [
        "REQUEST_METHOD=POST",
        "CONTENT_TYPE=text/html; charset=utf-8",
        "CONTENT_LENGTH=12",
        "REMOTE_ADDR=127.0.0.1",
        "NOEQUALS",
        "HTTP_USER_AGENT=agent",
    ]
    info = load_request_info(ApiType.CGI, environ)
    assert info.request_method == "POST"
    assert info.content_type == "text/html; charset=utf-8"
    assert info.content_length == "12"
    assert info.remote_addr == "127.0.0.1"
    assert ("NOEQUALS", "") not in info.environment
    assert len(info.environment) == 5
    assert ("Content-Length", "12") in info.http_headers
    assert ("Content-Type", "text/html; charset=utf-8") in info.http_headers
    assert ("User-Agent", "agent") in info.http_headers


def test_value_keeps_later_equals_signs():
    info = load_request_info(ApiType.CGI, ["QUERY_STRING=a=1&b=2"])
    assert info.query_string == "a=1&b=2"


def test_mapping_environ():
    info = load_request_info(ApiType.CGI, {"REQUEST_METHOD": "GET", "PATH_INFO": "/p"})
    assert info.request_method == "GET"
    assert info.real_path_info == "/p"


def test_query_string_removed_from_uri():
    uri = "/index.sl"
    info = load_request_info(
        ApiType.CGI, [f"REQUEST_URI={uri}?a=1", "QUERY_STRING=a=1"]
    )
    assert info.request_uri == uri + "?a=1"
    assert info.real_uri == uri


def test_uri_without_question_mark_is_kept():
    uri = "/index.sl/a=1"
    info = load_request_info(ApiType.CGI, [f"REQUEST_URI={uri}", "QUERY_STRING=a=1"])
    assert info.real_uri == uri


def test_cgi_uses_script_filename_fallback():
    info = load_request_info(ApiType.CGI, [], script_filename="/srv/site/app.sl")
    assert info.real_canonical_filename == "/srv/site/app.sl"
    assert info.real_canonical_dir == "/srv/site"


def test_cgi_environment_script_filename_wins():
    info = load_request_info(
        ApiType.CGI, ["SCRIPT_FILENAME=/a/b.sl"], script_filename="/srv/other.sl"
    )
    assert info.real_canonical_filename == "/a/b.sl"
    assert info.real_canonical_dir == "/a"


def test_fcgi_ignores_script_filename_argument():
    info = load_request_info(
        ApiType.FCGI, [], script_filename="/srv/app.sl", file_exists=lambda p: True
    )
    assert info.real_canonical_filename is None
    assert info.real_canonical_dir is None


def test_fcgi_splits_path_translated(tmp_path):
    script = tmp_path / "script.sl"
    script.write_text("1")
    info = load_request_info(
        ApiType.FCGI, [f"PATH_TRANSLATED={script}/extra/path", "PATH_INFO=/ignored"]
    )
    assert info.real_canonical_filename == str(script)
    assert info.real_path_info == "/extra/path"
    assert info.real_canonical_dir == str(tmp_path)


def test_fcgi_exact_file(tmp_path):
    script = tmp_path / "script.sl"
    script.write_text("1")
    info = load_request_info(ApiType.FCGI, [f"PATH_TRANSLATED={script}"])
    assert info.real_canonical_filename == str(script)
    assert info.real_path_info is None


def test_fcgi_missing_file(tmp_path):
    missing = tmp_path / "nope" / "x.sl"
    info = load_request_info(
        ApiType.FCGI, [f"PATH_TRANSLATED={missing}", "PATH_INFO=/keep"]
    )
    assert info.real_canonical_filename is None
    assert info.real_path_info == "/keep"


def test_fcgi_with_injected_predicate():
    target = "/srv/app.sl"
    info = load_request_info(
        1, [f"PATH_TRANSLATED={target}/one/two"], file_exists=lambda p: p == target
    )
    assert info.real_canonical_filename == target
    assert info.real_path_info == "/one/two"


def test_invalid_api_type():
    with pytest.raises(ValueError):
        load_request_info(7, [])


# --- RequestInfo.to_dict ---------------------------------------------------

def test_to_dict_contents():
    info = load_request_info(
        ApiType.CGI, ["REQUEST_METHOD=GET", "HTTP_HOST=example.com"]
    )
    result = info.to_dict()
    assert result["request_method"] == "GET"
    assert result["script_name"] is None
    assert result["real_uri"] is None
    assert result["environment"] == {
        "REQUEST_METHOD": "GET",
        "HTTP_HOST": "example.com",
    }
    assert result["http_headers"] == {"Host": "example.com"}


def test_empty_request_info_to_dict():
    result = RequestInfo().to_dict()
    assert result["environment"] == {}
    assert result["http_headers"] == {}
    assert all(
        value is None
        for key, value in result.items()
        if key not in ("environment", "http_headers")
    )