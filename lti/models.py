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

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

ParamValue = Union[str, List[str]]
RawParamValue = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class Credentials:
    consumer_key: str
    consumer_secret: str

    def __repr__(self) -> str:
        return f"Credentials(consumer_key={self.consumer_key!r}, consumer_secret='***')"


@dataclass(frozen=True)
class IncomingRequest:
    """A launch request as seen by the validator.

    ``params`` holds query-string and form-body parameters together. A name
    that was sent more than once maps to a list of its values.
    """
    method: str
    url: str
    params: Mapping[str, ParamValue]

    def get_param(self, name: str) -> Optional[str]:
        """First value sent for ``name``, or None"""
        value = self.params.get(name)
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def iter_param_pairs(self) -> Iterator[Tuple[str, str]]:
        """Every (name, value) pair, with multi-valued names flattened"""
        for name, value in self.params.items():
            if isinstance(value, list):
                for item in value:
                    yield name, item
            else:
                yield name, value


class Identity(BaseModel):
    """Normalized user record built from a validated launch"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    roles: Tuple[str, ...] = ()
    # Repeated names are held as tuples so the whole mapping stays read-only
    raw_params: Mapping[str, RawParamValue] = Field(default_factory=dict, validate_default=True)

    @field_validator("raw_params")
    @classmethod
    def freeze_raw_params(cls, value: Mapping[str, RawParamValue]) -> Mapping[str, RawParamValue]:
        return MappingProxyType(dict(value))

    @field_serializer("raw_params")
    def serialize_raw_params(self, value: Mapping[str, RawParamValue]) -> Dict[str, ParamValue]:
        return {name: list(item) if isinstance(item, tuple) else item for name, item in value.items()}

    def to_auth_hash(self) -> Dict:
        """Serialize in the uid/info/extra shape session layers expect"""
        return {
            "uid": self.user_id,
            "info": {
                "name": self.username,
                "email": self.email,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "image": self.image_url,
            },
            "roles": list(self.roles),
            "extra": {"raw_info": self.serialize_raw_params(self.raw_params)},
        }


class ValidationFailure(str, Enum):
    unsupported_method = 'unsupported_method'
    consumer_key_mismatch = 'consumer_key_mismatch'
    invalid_signature = 'invalid_signature'
    malformed_request = 'malformed_request'

    @property
    def http_status(self) -> int:
        if self is ValidationFailure.invalid_signature:
            return 401
        return 400


LaunchResult = Union[Identity, ValidationFailure]
