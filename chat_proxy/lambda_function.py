"""
Lambda Function: Bedrock Chat Proxy
Description: API Gateway entry point forwarding chat turns to Titan Text
"""

import json

import boto3
from botocore.config import Config

from chat_proxy.adapter import ChatAdapter
from chat_proxy.config import (
    BEDROCK_CONNECT_TIMEOUT,
    BEDROCK_READ_TIMEOUT,
    BEDROCK_REGION,
    MODEL_ID,
    configure_logging,
)

logger = configure_logging()

# ============================================================================
# AWS CLIENT INITIALIZATION
# ============================================================================
# Created once per execution environment and reused by warm invocations.
# Retries are disabled: a failed call is returned to the caller as-is.
bedrock_runtime = boto3.client(
    service_name='bedrock-runtime',
    region_name=BEDROCK_REGION,
    config=Config(
        connect_timeout=BEDROCK_CONNECT_TIMEOUT,
        read_timeout=BEDROCK_READ_TIMEOUT,
        retries={'total_max_attempts': 1}
    )
)

adapter = ChatAdapter(bedrock_runtime, model_id=MODEL_ID)


def lambda_handler(event, context):
    """
    Main Lambda handler function

    Args:
        event: API Gateway event object
        context: Lambda context object

    Returns:
        API Gateway response object
    """
    return adapter.handle(event, context)


# For local testing
if __name__ == "__main__":
    test_event = {
        'httpMethod': 'POST',
        'body': json.dumps({
            'message': 'How are you?',
            'history': [{'user': 'Hi', 'assistant': 'Hello!'}]
        })
    }

    class Context:
        aws_request_id = 'test-request-id'

    result = lambda_handler(test_event, Context())
    print(result['statusCode'])
    print(json.dumps(json.loads(result['body']), indent=2))
