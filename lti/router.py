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

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from constants import INTERNAL_SERVER_ERROR_MESSAGE, INVALID_LTI_REQUEST_MESSAGE
from lti.config import LTICredentialsProvider, get_credentials_provider
from lti.launch import LaunchProcessor
from lti.models import ValidationFailure
from lti.utils import build_incoming_request
from logging_config import setup_logging
from utility.exceptions import LTIConfigurationError

logger = setup_logging(module_name='lti')

router = APIRouter()
launch_processor = LaunchProcessor()


def get_launch_processor() -> LaunchProcessor:
    return launch_processor


def get_launch_credentials_provider() -> LTICredentialsProvider:
    try:
        return get_credentials_provider()
    except LTIConfigurationError as e:
        logger.error(f"LTI credentials provider unavailable: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_SERVER_ERROR_MESSAGE)


async def _launch(request: Request, credentials_provider: LTICredentialsProvider, processor: LaunchProcessor):
    try:
        credentials = credentials_provider.get_credentials()
    except LTIConfigurationError as e:
        logger.error(f"LTI credentials unavailable: {str(e)}")
        raise HTTPException(status_code=500, detail=INTERNAL_SERVER_ERROR_MESSAGE)

    try:
        incoming = await build_incoming_request(request)
        result = processor.process(incoming, credentials)
    except Exception as e:
        logger.error(f"Launch error: {str(e)}")
        raise HTTPException(status_code=400, detail=INVALID_LTI_REQUEST_MESSAGE)

    if isinstance(result, ValidationFailure):
        logger.info(f"LTI launch rejected: {result.value}")
        # Same detail for every failure so the response does not reveal which check failed
        raise HTTPException(status_code=result.http_status, detail=INVALID_LTI_REQUEST_MESSAGE)

    logger.info(f"LTI launch accepted for user_id {result.user_id}")
    return JSONResponse(content=result.to_auth_hash())


@router.post("/launch")
async def launch_post(
    request: Request,
    credentials_provider: LTICredentialsProvider = Depends(get_launch_credentials_provider),
    processor: LaunchProcessor = Depends(get_launch_processor),
):
    """Validates an LTI 1.x launch and returns the launching user's identity"""
    return await _launch(request, credentials_provider, processor)


@router.get("/launch")
async def launch_get(
    request: Request,
    credentials_provider: LTICredentialsProvider = Depends(get_launch_credentials_provider),
    processor: LaunchProcessor = Depends(get_launch_processor),
):
    """GET launches are always rejected by the processor's method check"""
    return await _launch(request, credentials_provider, processor)
