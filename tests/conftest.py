#
# Copyright 2025 EDT&Partners
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

"""
Global pytest configuration and fixtures for the LTI launch validator tests.

This module sets the environment variables read at import time, patches the
AWS clients, and provides helpers to build signed LTI launch requests.
"""

import os
import pytest
from typing import Dict, Generator
from unittest.mock import patch

# Set up environment variables immediately when module is imported
# This prevents import-time errors from modules that check environment variables
def setup_immediate_env():
    """Set up environment variables immediately to prevent import-time errors."""
    test_env_vars = {
        # AWS Core Configuration
        "AWS_REGION_NAME": "eu-central-1",
        "AWS_DEFAULT_REGION": "eu-central-1",
        "AWS_ACCESS_KEY_ID": "test-access-key-id",
        "AWS_SECRET_ACCESS_KEY": "test-secret-access-key",

        # Logging
        "LOG_LEVEL": "DEBUG",

        # LTI
        "LTI_CREDENTIALS_SOURCE": "env",
        "LTI_CONSUMER_KEY": "k1",
        "LTI_CONSUMER_SECRET": "s1",
    }

    for key, value in test_env_vars.items():
        if key not in os.environ:
            os.environ[key] = value


# Call immediately when module is imported
setup_immediate_env()

# Mock SSM Parameter Store
ssm_patcher = patch('utility.aws_clients.ssm_client')
mock_ssm = ssm_patcher.start()
mock_ssm.get_parameter.return_value = {
    'Parameter': {
        'Value': 'arn:aws:secretsmanager:eu-central-1:123456789:secret:test-lti-consumer-secret'
    }
}

# Mock Secrets Manager
secrets_patcher = patch('utility.aws_clients.secrets_client')
mock_secrets = secrets_patcher.start()
mock_secrets.get_secret_value.return_value = {
    'SecretString': 'test-consumer-secret'
}

from lti.models import Credentials, IncomingRequest  # noqa: E402
from lti.signature import SignatureValidator  # noqa: E402

LAUNCH_URL = "https://tool.example.com/launch"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    Global fixture that ensures the test environment is properly set up.

    This fixture runs automatically for all tests and ensures that all required
    environment variables remain set throughout the test session.
    """
    original_env = dict(os.environ)

    try:
        setup_immediate_env()
        yield
    finally:
        ssm_patcher.stop()
        secrets_patcher.stop()

        os.environ.clear()
        os.environ.update(original_env)


def sign_params(params: Dict[str, str], credentials: Credentials, method: str = "POST", url: str = LAUNCH_URL) -> Dict[str, str]:
    """Return a copy of ``params`` carrying a valid oauth_signature"""
    unsigned = {k: v for k, v in params.items() if k != "oauth_signature"}
    request = IncomingRequest(method=method, url=url, params=unsigned)
    return {**unsigned, "oauth_signature": SignatureValidator().sign(request, credentials)}


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(consumer_key="k1", consumer_secret="s1")


@pytest.fixture
def launch_params() -> Dict[str, str]:
    """Unsigned launch parameters for the canonical happy-path launch"""
    return {
        "oauth_consumer_key": "k1",
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_timestamp": "1234567890",
        "oauth_nonce": "abc",
        "lti_message_type": "basic-lti-launch-request",
        "lti_version": "LTI-1p0",
        "resource_link_id": "r1",
        "user_id": "u42",
        "lis_person_name_given": "Ada",
    }


@pytest.fixture
def signed_launch_params(launch_params, credentials) -> Dict[str, str]:
    return sign_params(launch_params, credentials)


@pytest.fixture
def signed_request(signed_launch_params) -> IncomingRequest:
    return IncomingRequest(method="POST", url=LAUNCH_URL, params=signed_launch_params)


@pytest.fixture
def signer():
    """The sign_params helper, for tests that need to re-sign modified parameters"""
    return sign_params
