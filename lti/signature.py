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

from oauthlib.common import safe_string_equals
from oauthlib.oauth1.rfc5849 import signature

from constants import (
    OAUTH_CONSUMER_KEY,
    OAUTH_HMAC_SHA1,
    OAUTH_NONCE,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAUTH_TIMESTAMP,
    OAUTH_VERSION,
    OAUTH_VERSION_1_0,
)
from lti.models import Credentials, IncomingRequest
from logging_config import setup_logging

logger = setup_logging(module_name='lti_signature')

REQUIRED_OAUTH_PARAMS = [
    OAUTH_CONSUMER_KEY,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAUTH_TIMESTAMP,
    OAUTH_NONCE,
]

# LTI launches carry no access token, so the token secret is always empty
TOKEN_SECRET = ''


class SignatureValidator:
    """Verifies OAuth 1.0a HMAC-SHA1 signatures on LTI launch requests.

    The base string is built from the upper-cased method, the request URL
    without query or fragment, and every parameter in ``request.params``
    except ``oauth_signature``. The signing key is the consumer secret
    followed by ``&``.
    """

    def has_required_oauth_params(self, request: IncomingRequest) -> bool:
        missing = [name for name in REQUIRED_OAUTH_PARAMS if not request.get_param(name)]
        if missing:
            logger.debug(f"Missing OAuth parameters: {missing}")
            return False

        if request.get_param(OAUTH_SIGNATURE_METHOD) != OAUTH_HMAC_SHA1:
            logger.debug(f"Unsupported signature method: {request.get_param(OAUTH_SIGNATURE_METHOD)}")
            return False

        version = request.get_param(OAUTH_VERSION)
        if version is not None and version != OAUTH_VERSION_1_0:
            logger.debug(f"Unsupported OAuth version: {version}")
            return False

        return True

    def base_string(self, request: IncomingRequest) -> str:
        """Signature base string for ``request``.

        Raises:
            ValueError: if the URL has no scheme or host, or a parameter is not a string
        """
        base_uri = signature.base_string_uri(request.url)
        params = [(name, value) for name, value in request.iter_param_pairs() if name != OAUTH_SIGNATURE]
        normalized_params = signature.normalize_parameters(params)
        return signature.signature_base_string(request.method.upper(), base_uri, normalized_params)

    def sign(self, request: IncomingRequest, credentials: Credentials) -> str:
        """Base64 HMAC-SHA1 signature expected for ``request``"""
        return signature.sign_hmac_sha1(
            self.base_string(request),
            credentials.consumer_secret,
            TOKEN_SECRET,
        )

    def verify(self, request: IncomingRequest, credentials: Credentials) -> bool:
        if not self.has_required_oauth_params(request):
            return False

        try:
            expected = self.sign(request, credentials)
        except ValueError as e:
            logger.debug(f"Could not build signature base string: {str(e)}")
            return False

        return safe_string_equals(expected, request.get_param(OAUTH_SIGNATURE))
