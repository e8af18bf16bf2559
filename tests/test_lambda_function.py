import io
import json

from chat_proxy import lambda_function
from chat_proxy.adapter import ChatAdapter


class _FakeBedrockClient:
    def invoke_model(self, **kwargs):
        prompt = json.loads(kwargs["body"])["inputText"]
        return {"body": io.BytesIO(json.dumps({"results": [{"outputText": f"echo:{prompt}"}]}).encode())}


def test_module_client_is_shared():
    assert lambda_function.adapter.bedrock_client is lambda_function.bedrock_runtime
    assert lambda_function.bedrock_runtime.meta.config.retries["total_max_attempts"] == 1


def test_lambda_handler_delegates_to_adapter(monkeypatch):
    monkeypatch.setattr(lambda_function, "adapter", ChatAdapter(_FakeBedrockClient()))

    r = lambda_function.lambda_handler({"httpMethod": "POST", "body": json.dumps({"message": "hi"})}, None)

    assert r["statusCode"] == 200
    assert json.loads(r["body"]) == {"response": "echo:User: hi\nAssistant:"}


def test_lambda_handler_preflight():
    r = lambda_function.lambda_handler({"httpMethod": "OPTIONS"}, None)

    assert r["statusCode"] == 200
    assert r["headers"]["Access-Control-Allow-Origin"] == "*"
