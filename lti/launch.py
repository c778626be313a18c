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

from typing import Optional, Tuple

from constants import (
    LTI_MESSAGE_TYPE,
    LTI_PERSON_EMAIL,
    LTI_PERSON_NAME_FAMILY,
    LTI_PERSON_NAME_GIVEN,
    LTI_PERSON_SOURCEDID,
    LTI_RESOURCE_LINK_ID,
    LTI_ROLES,
    LTI_USER_ID,
    LTI_USER_IMAGE,
    LTI_VERSION,
    OAUTH_CONSUMER_KEY,
)
from lti.models import Credentials, Identity, IncomingRequest, LaunchResult, ValidationFailure
from lti.signature import SignatureValidator
from logging_config import setup_logging

logger = setup_logging(module_name='lti_launch')

REQUIRED_LAUNCH_PARAMS = [
    LTI_MESSAGE_TYPE,
    LTI_VERSION,
    LTI_RESOURCE_LINK_ID,
    LTI_USER_ID,
]


def parse_roles(value: Optional[str]) -> Tuple[str, ...]:
    """Split the comma-separated LTI roles parameter"""
    if not value:
        return ()
    return tuple(role.strip() for role in value.split(',') if role.strip())


class LaunchProcessor:
    """Validates an LTI launch and builds the Identity it carries.

    Checks run in a fixed order and stop at the first failure: request
    method, consumer key, OAuth signature, then the required LTI launch
    parameters. An Identity is only built once all of them pass.
    """

    def __init__(self, signature_validator: Optional[SignatureValidator] = None):
        self.signature_validator = signature_validator or SignatureValidator()

    def process(self, request: IncomingRequest, credentials: Credentials) -> LaunchResult:
        logger.debug(f"Checking LTI params for consumer_key {credentials.consumer_key}: {sorted(request.params.keys())}")

        if request.method.upper() != 'POST':
            logger.info(f"LTI: Request method unsupported: {request.method}")
            return ValidationFailure.unsupported_method

        if request.get_param(OAUTH_CONSUMER_KEY) != credentials.consumer_key:
            logger.info("LTI: Invalid consumer key")
            return ValidationFailure.consumer_key_mismatch

        if not self.signature_validator.verify(request, credentials):
            logger.info("LTI: Signature verification failed")
            return ValidationFailure.invalid_signature

        missing = [name for name in REQUIRED_LAUNCH_PARAMS if not request.get_param(name)]
        if missing:
            logger.info(f"LTI: Missing launch parameters: {missing}")
            return ValidationFailure.malformed_request

        return self._build_identity(request)

    def _build_identity(self, request: IncomingRequest) -> Identity:
        user_id = request.get_param(LTI_USER_ID)
        return Identity(
            user_id=user_id,
            username=request.get_param(LTI_PERSON_SOURCEDID) or user_id,
            email=request.get_param(LTI_PERSON_EMAIL),
            first_name=request.get_param(LTI_PERSON_NAME_GIVEN),
            last_name=request.get_param(LTI_PERSON_NAME_FAMILY),
            image_url=request.get_param(LTI_USER_IMAGE),
            roles=parse_roles(request.get_param(LTI_ROLES)),
            raw_params={name: tuple(value) if isinstance(value, list) else value
                        for name, value in request.params.items()},
        )
