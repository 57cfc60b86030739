"""Exceptions raised while talking to and interpreting the assistant."""


class AssistantError(Exception):
    """Base exception for all assistant errors."""

    pass


class ParseFailure(AssistantError):
    """Raised when a structured reply cannot be decoded into a known action."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__("Unparseable action: {}".format(reason))


class UpstreamUnavailable(AssistantError):
    """Raised when the assistant service fails, times out or is not configured."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__("Assistant service unavailable: {}".format(reason))
