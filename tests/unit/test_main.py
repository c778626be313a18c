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

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_launch_with_environment_credentials(client, launch_params, credentials, signer):
    env = {"LTI_CREDENTIALS_SOURCE": "env", "LTI_CONSUMER_KEY": "k1", "LTI_CONSUMER_SECRET": "s1"}
    params = signer(launch_params, credentials, url="http://testserver/lti/launch")

    with patch.dict("os.environ", env):
        response = client.post("/lti/launch", data=params)

    assert response.status_code == 200
    assert response.json()["uid"] == "u42"


def test_launch_with_rotated_secret_is_rejected(client, launch_params, credentials, signer):
    env = {"LTI_CREDENTIALS_SOURCE": "env", "LTI_CONSUMER_KEY": "k1", "LTI_CONSUMER_SECRET": "rotated"}
    params = signer(launch_params, credentials, url="http://testserver/lti/launch")

    with patch.dict("os.environ", env):
        response = client.post("/lti/launch", data=params)

    assert response.status_code == 401
