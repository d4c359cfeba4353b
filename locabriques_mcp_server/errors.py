"""Error text formatting for tool failures.

Each group of tools has its own, historical, way of wording a failure. A
formatter is attached to every tool at registration time and receives the
failure together with the validated arguments of the call.
"""

import json
from typing import Any, Mapping

from .api_client import ApiFailure


def has_body(data: Any) -> bool:
    return data not in (None, "")


class ErrorFormatter:
    """Base class: render a failure as the text of an error envelope."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        raise NotImplementedError


class ContextFormatter(ErrorFormatter):
    """``<context>: <message>``, where context may reference arguments."""

    def __init__(self, template: str):
        self.template = template

    def context(self, arguments: Mapping[str, Any]) -> str:
        return self.template.format(**arguments)

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        return f"{self.context(arguments)}: {failure.message}"


class ContextDetailFormatter(ContextFormatter):
    """Like ``ContextFormatter`` but prefers the response body when present."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        if has_body(failure.data):
            detail = json.dumps(failure.data, indent=2, ensure_ascii=False)
        else:
            detail = failure.message
        return f"{self.context(arguments)}: {detail}"


class StatusDataFormatter(ErrorFormatter):
    """``Error: [<status>] - <compact response body or message>``."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        status = failure.status if failure.status else "Unknown"
        if has_body(failure.data):
            detail = json.dumps(failure.data, separators=(",", ":"), ensure_ascii=False)
        else:
            detail = failure.message
        return f"Error: [{status}] - {detail}"


class StatusMessageFormatter(ErrorFormatter):
    """``Error: [<status>] - <message>``."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        status = failure.status if failure.status else "Unknown"
        return f"Error: [{status}] - {failure.message}"


class PrefixedFormatter(ErrorFormatter):
    """``Error: <message>``."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        return f"Error: {failure.message}"


class BareFormatter(ErrorFormatter):
    """The message alone."""

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        return failure.message


class LegosetRetrieveFormatter(ErrorFormatter):

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        set_id = arguments.get("id")
        if failure.status == 404:
            return f"LEGO set with id '{set_id}' not found"
        return f"Could not retrieve LEGO set '{set_id}': {failure.message}"


IMPORT_FAILED_MESSAGE = "Import has failed for some reason. Team has been informed."


class LegosetRegisterFormatter(ErrorFormatter):
    """Registration failures.

    A 500 means the import pipeline failed and the team already knows about
    it: the caller must not be invited to try again.
    """

    def format(self, failure: ApiFailure, arguments: Mapping[str, Any]) -> str:
        if failure.status == 400:
            detail = None
            if isinstance(failure.data, dict):
                detail = failure.data.get("detail")
            return f"Bad request when registering set: {detail or failure.message}"
        if failure.status == 500:
            return IMPORT_FAILED_MESSAGE
        return f"Could not register LEGO set from brickset: {failure.message}"
