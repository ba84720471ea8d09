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
CA bundle resolution for calls to a remote PDF service behind a proxy.

Checks (in priority order):
  1. Explicit override via --ca-bundle CLI arg
  2. RESUME_PDF_CA_BUNDLE environment variable
  3. REQUESTS_CA_BUNDLE / CURL_CA_BUNDLE / SSL_CERT_FILE
  4. System defaults (True, which lets requests use certifi)
"""

import os
import logging

logger = logging.getLogger(__name__)

# Module-level override set by the CLI --ca-bundle flag
_ca_bundle_override: str | None = None

CA_BUNDLE_ENV_VARS = ("RESUME_PDF_CA_BUNDLE", "REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")


def set_ca_bundle_override(path: str | None) -> None:
    """Set (or clear, with None) an explicit CA bundle path."""
    global _ca_bundle_override
    _ca_bundle_override = path
    if path:
        logger.info(f"CA bundle override set to: {path}")


def get_ca_bundle() -> str | bool:
    """
    The `verify=` value PdfServiceClient passes to requests.post.

    RESUME_PDF_CA_BUNDLE lets the PDF service use its own bundle (e.g. an
    internal renderer behind a TLS-inspecting proxy) without changing how
    every other requests user in the process verifies certificates.

    Returns:
        str: Path to a CA bundle file, or
        bool: True to use requests' default trust store.
    """
    if _ca_bundle_override:
        return _ca_bundle_override

    for var in CA_BUNDLE_ENV_VARS:
        value = os.environ.get(var)
        if value:
            logger.debug(f"Using CA bundle from {var}: {value}")
            return value

    return True
