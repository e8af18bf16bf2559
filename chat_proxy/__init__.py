"""
Chat Proxy
Description: Stateless chat proxy between API Gateway and Amazon Bedrock Titan Text
"""

from chat_proxy.adapter import ChatAdapter, build_prompt, create_response
from chat_proxy.models import ChatRequest, GenerationConfig, Turn

__all__ = [
    'ChatAdapter',
    'ChatRequest',
    'GenerationConfig',
    'Turn',
    'build_prompt',
    'create_response',
]
