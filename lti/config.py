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

import os
from abc import ABC, abstractmethod
from typing import Optional
from botocore.exceptions import ClientError

from constants import DEFAULT_LTI_CONSUMER_KEY_PARAMETER, DEFAULT_LTI_CONSUMER_SECRET_ARN_PARAMETER
from lti.models import Credentials
from logging_config import setup_logging
from utility.aws_clients import secrets_client
from utility.exceptions import LTIConfigurationError, UnknownCredentialsSourceError
from utility.ssm_parameter_store import SSMParameterStore

logger = setup_logging(module_name='lti_config')


class LTICredentialsProvider(ABC):
    """Resolves the consumer key/secret pair for the configured LTI platform.

    Providers read their backing store on every call so that rotated
    credentials are picked up without restarting the service.
    """

    @abstractmethod
    def get_credentials(self) -> Credentials:
        pass


class LTIEnvCredentialsProvider(LTICredentialsProvider):
    def __init__(self, key_var: str = "LTI_CONSUMER_KEY", secret_var: str = "LTI_CONSUMER_SECRET"):
        self._key_var = key_var
        self._secret_var = secret_var

    def get_credentials(self) -> Credentials:
        consumer_key = os.getenv(self._key_var)
        consumer_secret = os.getenv(self._secret_var)
        if not consumer_key or not consumer_secret:
            logger.error(f"{self._key_var} or {self._secret_var} environment variable not set")
            raise LTIConfigurationError(f"{self._key_var} or {self._secret_var} environment variable not set")
        return Credentials(consumer_key=consumer_key, consumer_secret=consumer_secret)


class LTISSMCredentialsProvider(LTICredentialsProvider):
    """Consumer key from SSM Parameter Store, consumer secret from Secrets Manager.

    The Secrets Manager ARN is itself stored in SSM, the same way the
    session and encryption secrets are looked up.
    """

    def __init__(
        self,
        key_parameter: str = DEFAULT_LTI_CONSUMER_KEY_PARAMETER,
        secret_arn_parameter: str = DEFAULT_LTI_CONSUMER_SECRET_ARN_PARAMETER,
        parameter_store: Optional[SSMParameterStore] = None,
        secrets=None,
    ):
        self._key_parameter = key_parameter
        self._secret_arn_parameter = secret_arn_parameter
        self._parameter_store = parameter_store or SSMParameterStore()
        self._secrets = secrets or secrets_client

    def get_credentials(self) -> Credentials:
        consumer_key = self._parameter_store.get_parameter(self._key_parameter)
        if not consumer_key:
            raise LTIConfigurationError(f"SSM parameter {self._key_parameter} not set")

        secret_arn = self._parameter_store.get_parameter(self._secret_arn_parameter)
        if not secret_arn:
            raise LTIConfigurationError(f"SSM parameter {self._secret_arn_parameter} not set")

        try:
            response = self._secrets.get_secret_value(SecretId=secret_arn)
        except ClientError as e:
            logger.error(f"Error getting the LTI consumer secret {secret_arn}: {str(e)}")
            raise LTIConfigurationError(f"Could not read LTI consumer secret {secret_arn}") from e

        if 'SecretString' not in response:
            raise LTIConfigurationError("SecretString not found in Secrets Manager response for LTI consumer secret")

        return Credentials(consumer_key=consumer_key, consumer_secret=response['SecretString'])


def get_credentials_provider() -> LTICredentialsProvider:
    """Build the provider selected by LTI_CREDENTIALS_SOURCE (env or ssm)"""
    source = os.getenv("LTI_CREDENTIALS_SOURCE", "env").lower()
    if source == "env":
        return LTIEnvCredentialsProvider()
    if source == "ssm":
        return LTISSMCredentialsProvider(
            key_parameter=os.getenv("LTI_CONSUMER_KEY_PARAMETER", DEFAULT_LTI_CONSUMER_KEY_PARAMETER),
            secret_arn_parameter=os.getenv("LTI_CONSUMER_SECRET_ARN_PARAMETER", DEFAULT_LTI_CONSUMER_SECRET_ARN_PARAMETER),
        )
    raise UnknownCredentialsSourceError(f"Unsupported LTI_CREDENTIALS_SOURCE: {source}")
