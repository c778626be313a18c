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

INTERNAL_SERVER_ERROR_MESSAGE="Internal Server Error"
INVALID_LTI_REQUEST_MESSAGE="Invalid LTI request"
CONTENT_TYPE_FORM_URLENCODED="application/x-www-form-urlencoded"

# OAuth 1.0a
OAUTH_CONSUMER_KEY="oauth_consumer_key"
OAUTH_SIGNATURE="oauth_signature"
OAUTH_SIGNATURE_METHOD="oauth_signature_method"
OAUTH_TIMESTAMP="oauth_timestamp"
OAUTH_NONCE="oauth_nonce"
OAUTH_VERSION="oauth_version"
OAUTH_HMAC_SHA1="HMAC-SHA1"
OAUTH_VERSION_1_0="1.0"

# LTI 1.x launch parameters
LTI_MESSAGE_TYPE="lti_message_type"
LTI_VERSION="lti_version"
LTI_RESOURCE_LINK_ID="resource_link_id"
LTI_USER_ID="user_id"
LTI_ROLES="roles"
LTI_PERSON_SOURCEDID="lis_person_sourcedid"
LTI_PERSON_EMAIL="lis_person_contact_email_primary"
LTI_PERSON_NAME_GIVEN="lis_person_name_given"
LTI_PERSON_NAME_FAMILY="lis_person_name_family"
LTI_USER_IMAGE="user_image"

# Credentials configuration
DEFAULT_LTI_CONSUMER_KEY_PARAMETER="/lecture/global/LTI_CONSUMER_KEY"
DEFAULT_LTI_CONSUMER_SECRET_ARN_PARAMETER="/lecture/global/LTI_CONSUMER_SECRET_ARN"
