from typing import Optional


class CompletionServiceError(Exception):
    """Non-success response from the completion service."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Completion service returned {status_code}")
        self.status_code = status_code
        self.body = body


class DataStoreError(Exception):
    """Failure talking to the REST data store."""

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: str = ""
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DataStoreNotConfiguredError(DataStoreError):
    def __init__(self) -> None:
        super().__init__(
            "Supabase is not configured "
            "(SUPABASE_URL / SUPABASE_SERVICE_ROLE missing)."
        )


class StoryboardValidationError(Exception):
    status_code = 400


class StoryNotFoundError(Exception):
    status_code = 404
