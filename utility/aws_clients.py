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

import boto3
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

region_name = os.getenv('AWS_REGION_NAME')

# Initialize AWS session
session = boto3.Session(region_name=region_name)

# Clients used to resolve the LTI consumer credentials
secrets_client = session.client("secretsmanager")
ssm_client = session.client('ssm')
