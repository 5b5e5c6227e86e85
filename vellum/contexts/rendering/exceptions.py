"""Custom exceptions for rendering context."""

from typing import Optional


class CaptureOrEncodeError(Exception):
    """
    Exception raised when the export pipeline cannot produce a document file.

    No file is delivered when this is raised.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed ("capture", "compose", "encode", "write")
        template_id: Layout variant in use
        original_error: The underlying error
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        template_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.template_id = template_id
        self.original_error = original_error

        parts = [message]

        if stage:
            parts.append(f"Stage: {stage}")

        if template_id:
            parts.append(f"Template: {template_id}")

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class TemplateRenderError(Exception):
    """
    Exception raised when an HTML preview template fails to render.

    Attributes:
        message: Error description
        template_id: Layout variant
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.original_error = original_error

        parts = [message]
        if template_id:
            parts.append(f"Template: {template_id}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
