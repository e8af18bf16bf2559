"""
Chat Adapter
Description: Turns an API Gateway proxy event into a Titan Text completion
and shapes the result into a CORS-enabled HTTP response.
"""

import base64
import binascii
import json
import logging
import time
from datetime import datetime, timezone

from botocore.exceptions import BotoCoreError, ClientError

from chat_proxy.config import CORS_HEADERS, MODEL_ID, PREFLIGHT_BODY
from chat_proxy.errors import ChatProxyError, MalformedRequest, UpstreamFailure
from chat_proxy.models import GENERATION_CONFIG, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


# ============================================================================
# CHAT ADAPTER
# ============================================================================

class ChatAdapter:
    """
    Stateless request handler in front of a Bedrock text model

    The Bedrock client is created once per process by the caller and shared
    across invocations; the adapter never mutates it or keeps per-request state.

    Args:
        bedrock_client: boto3 ``bedrock-runtime`` client (or a test double)
        model_id: Bedrock model identifier
        generation_config: GenerationConfig sent with every request
    """

    def __init__(self, bedrock_client, model_id=MODEL_ID, generation_config=GENERATION_CONFIG):
        self.bedrock_client = bedrock_client
        self.model_id = model_id
        self.generation_config = generation_config

    def handle(self, event, context=None):
        """
        Handle one API Gateway proxy event

        Args:
            event: API Gateway event object
            context: Lambda context object

        Returns:
            API Gateway response object
        """
        request_start_time = time.time()
        request_id = getattr(context, 'aws_request_id', 'local')

        if get_http_method(event) == 'OPTIONS':
            log_event('preflight', {'requestId': request_id})
            return create_response(200, PREFLIGHT_BODY, preflight=True)

        try:
            request = ChatRequest.from_body(decode_body(event))
            prompt = build_prompt(request)

            log_event('request_started', {
                'requestId': request_id,
                'historyLength': len(request.history),
                'messageLength': len(request.message),
                'promptLength': len(prompt)
            })

            output_text = self.generate(prompt)

            log_event('request_completed', {
                'requestId': request_id,
                'outputLength': len(output_text),
                'duration': round(time.time() - request_start_time, 3)
            })

            return create_response(200, ChatResponse(response=output_text).model_dump())

        except ChatProxyError as e:
            log_event('request_rejected', {
                'requestId': request_id,
                'errorType': type(e).__name__,
                'statusCode': e.status_code,
                'error': e.message
            })
            return create_response(e.status_code, {'error': e.message})

        except Exception as e:
            log_event('request_failed', {
                'requestId': request_id,
                'errorType': type(e).__name__,
                'error': str(e),
                'duration': round(time.time() - request_start_time, 3)
            })
            return create_response(500, {'error': 'Internal server error'})

    def generate(self, prompt):
        """
        Send the prompt to Bedrock and return the first candidate's text

        Args:
            prompt: Fully rendered prompt string

        Returns:
            Generated text, or an empty string when Bedrock returned no candidates

        Raises:
            UpstreamFailure: the call failed, timed out, or returned invalid JSON
        """
        request_body = {
            'inputText': prompt,
            'textGenerationConfig': self.generation_config.to_payload()
        }

        try:
            response = self.bedrock_client.invoke_model(
                modelId=self.model_id,
                contentType='application/json',
                accept='application/json',
                body=json.dumps(request_body)
            )
            raw_body = response['body'].read()
        except (ClientError, BotoCoreError) as e:
            failure = UpstreamFailure.from_botocore(e)
            log_event('bedrock_error', {
                'errorCode': failure.error_code,
                'statusCode': failure.status_code,
                'message': str(e)
            })
            raise failure from e

        try:
            response_body = json.loads(raw_body)
        except ValueError as e:
            log_event('bedrock_error', {
                'errorCode': 'InvalidResponseBody',
                'statusCode': 502,
                'message': str(e)
            })
            raise UpstreamFailure('Model service returned an invalid response',
                                  error_code='InvalidResponseBody') from e

        return extract_output_text(response_body)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_http_method(event):
    """Read the request method from a REST (v1) or HTTP API (v2) event"""
    if not isinstance(event, dict):
        return ''

    method = event.get('httpMethod')
    if not method:
        request_context = event.get('requestContext')
        http = request_context.get('http') if isinstance(request_context, dict) else None
        method = http.get('method') if isinstance(http, dict) else None
    return str(method or '').upper()


def decode_body(event):
    """
    Extract the JSON body from a proxy event

    Args:
        event: API Gateway event, or a bare payload from a direct invocation

    Returns:
        Decoded body

    Raises:
        MalformedRequest: body is not valid base64 or JSON
    """
    if not isinstance(event, dict) or 'body' not in event:
        # Direct invocation (console test event): the event is the payload
        return event

    body = event['body']
    if body is None:
        return {}
    if not isinstance(body, (str, bytes)):
        return body

    if event.get('isBase64Encoded'):
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedRequest('Request body is not valid base64') from e

    if not body:
        return {}

    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedRequest('Request body is not valid JSON') from e


def build_prompt(request):
    """
    Render the conversation as a single Titan prompt

    Args:
        request: ChatRequest

    Returns:
        Prompt ending in ``Assistant:`` with no trailing newline
    """
    prompt = ''
    for turn in request.history:
        prompt += f"User: {turn.user}\nAssistant: {turn.assistant}\n"
    prompt += f"User: {request.message}\nAssistant:"
    return prompt


def extract_output_text(response_body):
    """Pull results[0].outputText out of a Titan response, defaulting to ''"""
    if not isinstance(response_body, dict):
        return ''

    results = response_body.get('results') or []
    if not isinstance(results, list) or not results:
        return ''

    first = results[0]
    if not isinstance(first, dict):
        return ''
    output_text = first.get('outputText')
    return output_text if isinstance(output_text, str) else ''


def log_event(event_type, data):
    """Structured logging helper"""
    log_entry = {
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        'event': event_type,
        **data
    }
    logger.info(json.dumps(log_entry))


def create_response(status_code, body, preflight=False):
    """
    Create API Gateway response

    Every response carries the CORS headers, errors included, or browsers
    report cross-origin failures without the status or body.

    Args:
        status_code: HTTP status code
        body: JSON-serializable response body
        preflight: Omit Content-Type for OPTIONS responses

    Returns:
        API Gateway formatted response
    """
    headers = dict(CORS_HEADERS)
    if not preflight:
        headers['Content-Type'] = 'application/json'

    return {
        'statusCode': status_code,
        'headers': headers,
        'body': json.dumps(body)
    }
