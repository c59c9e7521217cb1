class CampaignAnalyzerError(Exception):
    """Base error. `status_code` is what the API answers with."""

    status_code = 500
    error = "Failed to analyze campaigns."

    def __init__(self, message: str, status_code: int = None, error: str = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error is not None:
            self.error = error


class InputValidationError(CampaignAnalyzerError):
    """A required input is missing or unusable."""

    status_code = 400
    error = "Missing required parameters in request body."


class ConfigurationError(CampaignAnalyzerError):
    """The server is missing a credential or setting."""

    error = "Server misconfiguration."


class OracleResponseError(CampaignAnalyzerError):
    """The scoring oracle answered with nothing usable."""


class OracleTransportError(CampaignAnalyzerError):
    """The scoring oracle could not be reached."""


class AnalysisServiceError(Exception):
    """Raised by the HTTP client when the analysis backend fails."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
