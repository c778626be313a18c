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

from contextlib import asynccontextmanager
from fastapi import FastAPI
import uvicorn

from logging_config import setup_logging
from lti.router import router as lti_router

logger = setup_logging(module_name='main')


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application lifespan...")
    yield
    logger.info("Shutting down application...")


app = FastAPI(
    lifespan=lifespan,
    title="LTI Launch Validator",
    description="Validates LTI 1.x launch requests and returns the launching user's identity",
)

app.include_router(lti_router, prefix="/lti", tags=["LTI"])


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
