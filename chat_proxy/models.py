"""
Request, response and generation payload types.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from chat_proxy.errors import MalformedRequest


class Turn(BaseModel):
    """One prior user/assistant exchange"""

    model_config = ConfigDict(frozen=True)

    user: str = ''
    assistant: str = ''


class ChatRequest(BaseModel):
    """
    Validated generation request

    Missing fields default to empty: no message means an empty prompt line,
    no history means a fresh conversation. Explicit nulls or wrong types are
    rejected.
    """

    model_config = ConfigDict(frozen=True)

    message: str = ''
    history: Tuple[Turn, ...] = ()

    @classmethod
    def from_body(cls, body):
        """
        Build a ChatRequest from a decoded request body

        Args:
            body: Decoded JSON body, expected to be an object

        Returns:
            ChatRequest

        Raises:
            MalformedRequest: body is not an object or fails validation
        """
        if not isinstance(body, dict):
            raise MalformedRequest('Request body must be a JSON object')

        # Tuples would accept a JSON object's keys; only arrays are valid history
        if 'history' in body and not isinstance(body['history'], list):
            raise MalformedRequest('Invalid request: history must be a list')

        try:
            return cls.model_validate(body)
        except ValidationError as e:
            first = e.errors()[0]
            location = '.'.join(str(part) for part in first['loc'])
            raise MalformedRequest(f"Invalid request: {location}: {first['msg']}") from e


class ChatResponse(BaseModel):
    response: str = ''


class GenerationConfig(BaseModel):
    """Fixed Titan Text generation settings"""

    model_config = ConfigDict(frozen=True)

    max_token_count: int = 300
    temperature: float = 0.7
    top_p: float = 0.9
    stop_sequences: Tuple[str, ...] = ()

    def to_payload(self):
        """Render as Titan's textGenerationConfig"""
        return {
            'maxTokenCount': self.max_token_count,
            'temperature': self.temperature,
            'topP': self.top_p,
            'stopSequences': list(self.stop_sequences)
        }


GENERATION_CONFIG = GenerationConfig()
