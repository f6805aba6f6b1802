"""Exception types shared across the AI service, tools and API layers."""


class ProviderError(RuntimeError):
    """A completion backend failed (transport, HTTP status, empty reply)."""


class ResponseParseError(ValueError):
    """A backend reply could not be parsed into the expected payload."""


class AllProvidersFailedError(RuntimeError):
    """Every provider in the trial order failed, or none was available.

    ``str(exc)`` is the newline-joined ``"<provider>: <message>"`` log, in
    the order the attempts were made. It is empty when nothing was tried.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class ToolError(Exception):
    """A tool rejected its input or failed; the message is user-facing."""
