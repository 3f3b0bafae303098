"""Errors raised by the report actions engine."""


class InvalidReportActionsError(TypeError):
    """A collection argument was not a list or tuple of actions (caller bug)."""

    def __init__(self, caller: str, received: object) -> None:
        super().__init__(
            f"{caller} requires a list of report actions, "
            f"received {type(received).__name__}"
        )
        self.caller = caller
        self.received_type = type(received).__name__
