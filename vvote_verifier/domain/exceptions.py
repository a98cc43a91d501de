"""Base exception classes for the verifier domain layer."""


class VerifierError(Exception):
    """Base exception for all verifier errors.

    All verifier-specific exceptions MUST inherit from this class so that
    the orchestrating verifier can record them as findings without
    aborting a run.

    Families:
    - MalformedInputError: a published record could not be parsed
    - ConfigurationError: election or verifier configuration is unusable
    - BLSSignatureError: threshold signature shares cannot be combined
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
