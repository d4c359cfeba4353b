"""Tests for the error text families."""

from locabriques_mcp_server.api_client import HttpFailure, NO_RESPONSE_MESSAGE, TransportFailure
from locabriques_mcp_server.errors import (
    BareFormatter, ContextDetailFormatter, ContextFormatter, IMPORT_FAILED_MESSAGE,
    LegosetRegisterFormatter, LegosetRetrieveFormatter, PrefixedFormatter,
    StatusDataFormatter, StatusMessageFormatter,
)


NOT_FOUND = HttpFailure(status=404, message="LocaBriques API Error [404]: Request failed with status code 404",
                        data={"detail": "Not found."})
OFFLINE = TransportFailure(NO_RESPONSE_MESSAGE)


def test_context_formatter_uses_arguments():
    formatter = ContextFormatter("Could not fetch shop '{slug}'")
    text = formatter.format(NOT_FOUND, {"slug": "brick-house"})
    assert text == f"Could not fetch shop 'brick-house': {NOT_FOUND.message}"


def test_context_detail_formatter_prefers_body():
    formatter = ContextDetailFormatter("Could not fetch users")
    assert formatter.format(NOT_FOUND, {}) == 'Could not fetch users: {\n  "detail": "Not found."\n}'
    assert formatter.format(OFFLINE, {}) == f"Could not fetch users: {NO_RESPONSE_MESSAGE}"


def test_status_data_formatter():
    formatter = StatusDataFormatter()
    assert formatter.format(NOT_FOUND, {}) == 'Error: [404] - {"detail":"Not found."}'
    assert formatter.format(OFFLINE, {}) == f"Error: [Unknown] - {NO_RESPONSE_MESSAGE}"


def test_status_data_formatter_empty_body_falls_back_to_message():
    failure = HttpFailure(status=502, message="LocaBriques API Error [502]: Request failed with status code 502")
    assert StatusDataFormatter().format(failure, {}) == f"Error: [502] - {failure.message}"


def test_status_message_formatter_ignores_body():
    formatter = StatusMessageFormatter()
    assert formatter.format(NOT_FOUND, {}) == f"Error: [404] - {NOT_FOUND.message}"
    assert formatter.format(OFFLINE, {}) == f"Error: [Unknown] - {NO_RESPONSE_MESSAGE}"


def test_prefixed_and_bare_formatters():
    assert PrefixedFormatter().format(OFFLINE, {}) == f"Error: {NO_RESPONSE_MESSAGE}"
    assert BareFormatter().format(OFFLINE, {}) == NO_RESPONSE_MESSAGE


def test_legoset_retrieve_formatter():
    formatter = LegosetRetrieveFormatter()
    assert formatter.format(NOT_FOUND, {"id": 999}) == "LEGO set with id '999' not found"
    assert formatter.format(OFFLINE, {"id": 123}) == f"Could not retrieve LEGO set '123': {NO_RESPONSE_MESSAGE}"


def test_legoset_register_formatter():
    formatter = LegosetRegisterFormatter()

    bad_request = HttpFailure(status=400, message="LocaBriques API Error [400]: Request failed with status code 400",
                              data={"detail": "Invalid brickset_set_id"})
    assert formatter.format(bad_request, {}) == "Bad request when registering set: Invalid brickset_set_id"

    bare_bad_request = HttpFailure(status=400, message="LocaBriques API Error [400]: oops")
    assert formatter.format(bare_bad_request, {}) == "Bad request when registering set: LocaBriques API Error [400]: oops"

    server_error = HttpFailure(status=500, message="LocaBriques API Error [500]: boom")
    assert formatter.format(server_error, {}) == IMPORT_FAILED_MESSAGE
    assert "retry" not in formatter.format(server_error, {}).lower()

    assert formatter.format(OFFLINE, {}) == f"Could not register LEGO set from brickset: {NO_RESPONSE_MESSAGE}"
