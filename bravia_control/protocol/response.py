# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import json

from ..internal_types import *

class ScalarResponse:
    """A decoded Scalar Web API response body.

    Successful calls answer with

        {"result": [...], "id": <id>}

    and failed calls with

        {"error": [<code>, <message>], "id": <id>}

    The transport turns error bodies into ApplicationError, so a ScalarResponse
    handed to the client normally has a result; it may still lack one if the
    TV sends something unexpected.
    """
    method: str
    body: JsonableDict
    raw_body: str

    def __init__(self, method: str, body: JsonableDict, raw_body: Optional[str]=None):
        self.method = method
        self.body = body
        self.raw_body = json.dumps(body) if raw_body is None else raw_body

    @property
    def has_result(self) -> bool:
        return isinstance(self.body.get('result', None), list)

    @property
    def result(self) -> List[Any]:
        """The "result" array. Check has_result first."""
        result = self.body['result']
        assert isinstance(result, list)
        return result

    def first_result(self) -> Any:
        """The first element of the "result" array, or None if it is empty."""
        result = self.result
        return result[0] if len(result) > 0 else None

    @property
    def has_error(self) -> bool:
        return 'error' in self.body

    @property
    def error_code(self) -> Optional[int]:
        error = self.body.get('error', None)
        if isinstance(error, list) and len(error) > 0 and isinstance(error[0], int):
            return error[0]
        return None

    @property
    def error_message(self) -> Optional[str]:
        error = self.body.get('error', None)
        if isinstance(error, list) and len(error) > 1:
            return str(error[1])
        return None

    @property
    def id(self) -> Optional[int]:
        id = self.body.get('id', None)
        return id if isinstance(id, int) else None

    def __str__(self) -> str:
        return f"ScalarResponse({self.method}: {self.raw_body})"

    def __repr__(self) -> str:
        return str(self)
