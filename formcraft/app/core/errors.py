"""Domain errors and their mapping onto HTTP responses."""
# app/core/errors.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class FormcraftError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormNotFound(FormcraftError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, form_id: str):
        super().__init__("Form not found")
        self.form_id = form_id


class ResponseNotFound(FormcraftError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, response_id: str):
        super().__init__("Response not found")
        self.response_id = response_id


class FormNotPublished(FormcraftError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, form_id: str):
        super().__init__("Form is not published")
        self.form_id = form_id


class InvalidUpload(FormcraftError):
    status_code = status.HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FormcraftError)
    async def _formcraft_error(request: Request, exc: FormcraftError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
