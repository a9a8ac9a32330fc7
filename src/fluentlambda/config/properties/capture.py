# Copyright 2026 Firefly Software Solutions Inc.
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
"""Capture configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fluentlambda.core.config import config_properties


@config_properties(prefix="fluentlambda.capture")
class CaptureProperties(BaseModel):
    """Configuration for stand-in generation and functor invocation (fluentlambda.capture.*)."""

    model_config = ConfigDict(frozen=True)

    intercept_properties: bool = True
    require_return_annotation: bool = False
    log_invocation_failures: bool = True
