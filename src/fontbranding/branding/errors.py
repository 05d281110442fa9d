from __future__ import annotations

from typing import Optional


class FontBrandingError(RuntimeError):
    """
    Base for every pipeline failure.

    `message` is the short title shown to the merchant, `error` the detail line.
    `step` names the pipeline step that failed (only logged, never returned).
    """

    step = "pipeline"

    def __init__(self, message: str, error: str, step: Optional[str] = None):
        super().__init__(f"{message}: {error}")
        self.message = message
        self.error = error
        if step:
            self.step = step


class InputValidationError(FontBrandingError):
    step = "validate"


class MissingFileError(InputValidationError):
    def __init__(self):
        super().__init__("No font file provided", "Please upload a font file")


class InvalidFileTypeError(InputValidationError):
    def __init__(self, file_name: str):
        super().__init__("Invalid file type", "Only .woff and .woff2 files are allowed")
        self.file_name = file_name


class ProvisionError(FontBrandingError):
    step = "provision"


class TransmissionError(FontBrandingError):
    step = "transmit"

    def __init__(self, status_code: Optional[int], body: Optional[str] = None):
        super().__init__("Failed to upload file", f"Upload failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class RegistrationError(FontBrandingError):
    step = "register"


class ProcessingError(FontBrandingError):
    step = "poll"

    def __init__(self, file_id: str):
        super().__init__("File processing failed", "Shopify could not process the font file")
        self.file_id = file_id


class ProcessingTimeoutError(FontBrandingError):
    step = "poll"

    def __init__(self, file_id: str, attempts: int):
        super().__init__("File processing timeout", "File took too long to process")
        self.file_id = file_id
        self.attempts = attempts


class NoActiveProfileError(FontBrandingError):
    step = "resolve_profile"

    def __init__(self):
        super().__init__(
            "No checkout profile found",
            "Could not find a published checkout profile. Make sure you have Shopify Plus.",
        )


class BindingError(FontBrandingError):
    step = "apply_binding"


class UnexpectedError(FontBrandingError):
    def __init__(self, cause: BaseException, step: Optional[str] = None):
        super().__init__("An unexpected error occurred", str(cause) or "Unknown error", step=step)
        self.cause = cause


def join_user_errors(user_errors) -> str:
    return ", ".join(str(e.get("message", "")) for e in user_errors)
