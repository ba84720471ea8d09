# Copyright 2026 Justin Cook
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

"""
Exceptions raised by the resume pipeline.
"""


class ResumeError(Exception):
    """Base class for all user-facing resume errors."""


class ResumeImportError(ResumeError):
    """The Markdown input does not contain any '## ' sections."""


class StructureError(ResumeError, ValueError):
    """A mutation would leave the resume in an invalid shape."""


class RenderFault(ResumeError):
    """
    The PDF rendering service failed, timed out or was unreachable.

    `structured` is True when the service answered with a JSON error body,
    in which case the message is the one reported by the service.
    """
    def __init__(self, message: str, structured: bool = False, status_code: int = None):
        super().__init__(message)
        self.structured = structured
        self.status_code = status_code
