class DataAccessFailure(Exception):
    """The snapshot source could not be read or returned a malformed record set."""


class AnalysisFailure(Exception):
    """
    The single error kind surfaced by the analysis boundary.
    The underlying cause is chained on __cause__ and logged, never exposed in the message.
    """

    def __init__(self, message: str = "Error While searching data"):
        super().__init__(message)
