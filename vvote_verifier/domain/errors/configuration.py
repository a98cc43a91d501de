"""Configuration errors.

Raised when the election configuration or the verifier settings cannot be
used. A configuration error is fatal for the printer commitment that needed
the configuration, never for the whole run.
"""

from vvote_verifier.domain.exceptions import VerifierError


class ConfigurationError(VerifierError):
    """Raised when configuration data is missing or invalid.

    Attributes:
        setting: Name of the offending setting.
        reason: What was wrong with it.
    """

    def __init__(self, setting: str, reason: str) -> None:
        """Initialize configuration error.

        Args:
            setting: Name of the offending setting.
            reason: What was wrong with it.
        """
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration '{setting}': {reason}")


class CurveMismatchError(ConfigurationError):
    """Raised when the election uses a curve this verifier cannot check.

    Attributes:
        expected: The supported curve name.
        actual: The curve named by the election configuration.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            "curve", f"expected {expected}, election configuration uses {actual}"
        )
