"""
Error types surfaced to the caller as shaped HTTP responses.
"""

from botocore.exceptions import BotoCoreError, ClientError

# Bedrock error codes that mean "slow down" rather than "broken"
THROTTLING_ERROR_CODES = (
    'ThrottlingException',
    'TooManyRequestsException',
    'ServiceQuotaExceededException',
)


class ChatProxyError(Exception):
    """Base class for failures that map to a specific HTTP status"""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MalformedRequest(ChatProxyError):
    """The request body could not be decoded or failed shape validation"""

    status_code = 400


class UpstreamFailure(ChatProxyError):
    """Bedrock errored, throttled, timed out, or returned garbage"""

    status_code = 502

    def __init__(self, message, status_code=None, error_code=None):
        super().__init__(message, status_code)
        self.error_code = error_code

    @classmethod
    def from_botocore(cls, error):
        """
        Translate a botocore exception into an UpstreamFailure

        Args:
            error: ClientError or BotoCoreError raised by the Bedrock client

        Returns:
            UpstreamFailure with 429 for throttling, 502 otherwise
        """
        if isinstance(error, ClientError):
            error_code = error.response.get('Error', {}).get('Code', 'Unknown')
            if error_code in THROTTLING_ERROR_CODES:
                return cls('Model service is throttling requests, retry later',
                           status_code=429, error_code=error_code)
            return cls('Model service request failed', error_code=error_code)

        if isinstance(error, BotoCoreError):
            return cls('Model service is unavailable', error_code=type(error).__name__)

        return cls('Model service request failed', error_code=type(error).__name__)
