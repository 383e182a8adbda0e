# Standard library imports
from typing import Any

# Third-party imports
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class CustomJSONResponse(JSONResponse):
    """
    JSON response that drops top-level null 'data', 'meta' and 'error' keys
    from BaseResponse envelopes.
    """

    def render(self, content: Any) -> bytes:
        json_content = jsonable_encoder(content)

        if isinstance(json_content, dict) and "ok" in json_content:
            for key in ("data", "meta", "error"):
                if json_content.get(key) is None:
                    json_content.pop(key, None)

        return super().render(json_content)
