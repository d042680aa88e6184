"""
Pytest configuration file.

Sets up the Python path so test files can import from the python/ directory,
and provides the fakes shared by the ECR auth tests.
"""
import base64
import sys
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

# Add python directory to path for all tests
_python_dir = Path(__file__).parent.parent / 'python'
_python_dir_abs = str(_python_dir.absolute())
if _python_dir_abs not in sys.path:
    sys.path.insert(0, _python_dir_abs)

ENDPOINT = "https://12345.dkr.ecr.us-east-1.amazonaws.com/"
GOOD_TOKEN = "QVdTOnNvbWVwYXNzd29yZA=="  # "AWS:somepassword"
BAD_TOKEN = "aW52YWxpZA=="  # "invalid"


class FakeSleep:
    """Records requested sleeps instead of sleeping"""

    def __init__(self):
        self.calls = []

    def sleep_ms(self, millis):
        self.calls.append(millis)

    @property
    def slept(self):
        return sum(self.calls)


def auth_data(token=GOOD_TOKEN, endpoint=ENDPOINT):
    return {"authorizationToken": token, "proxyEndpoint": endpoint}


def token_response(*items):
    return {"authorizationData": list(items)}


def client_error(code, message="error", status=400):
    return ClientError(
        {"Error": {"Code": code, "Message": message}, "ResponseMetadata": {"HTTPStatusCode": status}},
        "GetAuthorizationToken",
    )


def server_exception():
    return client_error("ServerException", "Service unavailable", status=500)


def invalid_parameter_exception():
    return client_error("InvalidParameterException", "Bad parameters", status=400)


def encode(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def fake_sleep():
    return FakeSleep()
