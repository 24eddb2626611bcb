from typing import List, Union

from fastapi.responses import JSONResponse


class APIExceptionResponse(JSONResponse):
    def __init__(self, status_code: int, error: Union[Exception, str]):
        super().__init__(
            status_code=status_code,
            content={
                "error": str(error),
            },
        )


class ValidationErrorResponse(JSONResponse):
    def __init__(self, errors: List[str]):
        super().__init__(status_code=400, content={"errors": errors})


__all__ = ["APIExceptionResponse", "ValidationErrorResponse"]
