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

from typing import Dict, Iterable, List, Tuple
from fastapi import Request

from constants import CONTENT_TYPE_FORM_URLENCODED
from lti.models import IncomingRequest, ParamValue
from logging_config import setup_logging

logger = setup_logging(module_name='lti_utils')


def is_form_urlencoded(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == CONTENT_TYPE_FORM_URLENCODED


def group_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, ParamValue]:
    """Fold (name, value) pairs into a mapping, keeping repeated names as lists"""
    grouped: Dict[str, List[str]] = {}
    for name, value in pairs:
        grouped.setdefault(name, []).append(value)
    return {name: values[0] if len(values) == 1 else values for name, values in grouped.items()}


async def get_form_pairs(request: Request) -> List[Tuple[str, str]]:
    """Form body pairs, only for application/x-www-form-urlencoded bodies"""
    if not is_form_urlencoded(request):
        return []
    form_data = await request.form()
    pairs = [(name, value) for name, value in form_data.multi_items() if isinstance(value, str)]
    logger.debug(f"Retrieved form data: {[name for name, _ in pairs]}")
    return pairs


async def build_incoming_request(request: Request) -> IncomingRequest:
    """Collect the OAuth parameters of an HTTP request.

    Query-string parameters are always collected. Body parameters are
    only collected for form-encoded bodies.
    """
    pairs = list(request.query_params.multi_items())
    pairs.extend(await get_form_pairs(request))
    return IncomingRequest(
        method=request.method,
        url=str(request.url),
        params=group_params(pairs),
    )
