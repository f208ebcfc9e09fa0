"""Error taxonomy shared by providers, the pipeline and the HTTP layer."""


class NutritionCompareError(Exception):
    """Base class for errors raised by the service."""


class ClientInputError(NutritionCompareError):
    """Request is missing a field or carries a value outside the known set."""


class RecognitionError(NutritionCompareError):
    """The vision model could not name the dish."""


class MissingCredentialsError(NutritionCompareError):
    """A vendor client was called without its credentials configured."""


class ProviderError(NutritionCompareError):
    """A nutrition provider failed to return a usable record.

    ``detail`` keeps the raw upstream body for logs. It is never part of the
    message shown to callers.
    """

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        stage: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.provider = provider
        self.message = message
        self.stage = stage
        self.detail = detail
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        """Human-readable description safe to return to clients."""
        if self.stage:
            return f"{self.provider} failed at {self.stage}: {self.message}"
        return f"{self.provider} failed: {self.message}"


class NutritionParseError(ProviderError):
    """A language-model answer did not contain a well-formed JSON object."""
