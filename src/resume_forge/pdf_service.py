
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
HTML to PDF conversion.

PDFs are produced from render_html() output by a headless browser, either
behind an HTTP service (POST {"html": ...} -> application/pdf) or, when no
service is configured, by a local Chromium driven through Playwright.
Both paths return the whole PDF or raise RenderFault; nothing is retried.
"""

import os
import logging
from pathlib import Path

import requests
from bs4 import BeautifulSoup

from resume_forge.errors import RenderFault
from resume_forge.html_renderer import render_html
from resume_forge.models import Resume
from resume_forge.ssl_helpers import get_ca_bundle

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
GENERIC_SERVER_FAILURE = "PDF generation failed on the server."
OPAQUE_FAILURE = (
    "Server error: The PDF generation service is not responding correctly. "
    "Please check the service logs for more details."
)

# Print margins used by the service; the resume margin itself is container padding
PRINT_MARGIN = "0.5in"

BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
]


def _extract_text_from_html(html: str) -> str:
    """Extracts readable text from an HTML error page."""
    soup = BeautifulSoup(html, 'html.parser')
    for script in soup(["script", "style"]):
        script.decompose()

    lines = (line.strip() for line in soup.get_text().splitlines())
    return ' '.join(line for line in lines if line)


def _parse_timeout(value) -> float:
    """Seconds as a positive float; RESUME_PDF_TIMEOUT arrives as a string."""
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise RenderFault(f"Invalid PDF service timeout '{value}': expected a number of seconds.") from e
    if timeout <= 0:
        raise RenderFault(f"Invalid PDF service timeout '{value}': must be greater than zero.")
    return timeout


class PdfServiceClient:
    """
    Client for a remote HTML to PDF service.

    The URL and timeout fall back to RESUME_PDF_SERVICE_URL and
    RESUME_PDF_TIMEOUT (seconds).
    """
    def __init__(self, url: str = None, timeout: float = None):
        self.url = url or os.environ.get("RESUME_PDF_SERVICE_URL")
        self.timeout = _parse_timeout(timeout or os.environ.get("RESUME_PDF_TIMEOUT") or DEFAULT_TIMEOUT)

    def _fault_from_response(self, response) -> RenderFault:
        """
        Converts a failed response into a RenderFault.

        JSON bodies are trusted for the message. Anything else (typically a
        crashed function's HTML error page) gets a fixed message, and its
        text only goes to the log.
        """
        content_type = response.headers.get('content-type', '')
        if 'application/json' in content_type:
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                if data.get('error'):
                    logger.error(f"PDF service error detail: {data['error']}")
                message = data.get('message') or GENERIC_SERVER_FAILURE
                return RenderFault(message, structured=True, status_code=response.status_code)

        snippet = _extract_text_from_html(response.text or "")[:200]
        logger.error(f"PDF service returned {response.status_code} ({content_type or 'no content type'}): {snippet}")
        return RenderFault(OPAQUE_FAILURE, structured=False, status_code=response.status_code)

    def generate_pdf(self, html: str) -> bytes:
        """
        Sends the HTML to the service and returns the PDF bytes.

        Raises:
            RenderFault: On connection errors, timeouts and non-PDF responses.
        """
        if not self.url:
            raise RenderFault("No PDF service configured (set --pdf-service or RESUME_PDF_SERVICE_URL).")

        logger.info(f"Requesting PDF from: {self.url}")
        try:
            response = requests.post(
                self.url,
                json={"html": html},
                headers={'Accept': 'application/pdf, application/json'},
                timeout=self.timeout,
                verify=get_ca_bundle(),
            )
        except requests.exceptions.Timeout as e:
            raise RenderFault(f"PDF service did not answer within {self.timeout:g}s.") from e
        except requests.exceptions.RequestException as e:
            raise RenderFault(f"PDF service is unreachable: {e}") from e

        if not response.ok:
            raise self._fault_from_response(response)

        if 'application/pdf' not in response.headers.get('content-type', ''):
            raise self._fault_from_response(response)

        logger.debug(f"    > Received {len(response.content)} bytes")
        return response.content


class LocalPdfRenderer:
    """
    Renders PDFs with a local headless Chromium.

    Content load and PDF generation each get a bounded wait, and the page
    and browser are closed on every exit path.
    """
    def __init__(self, load_timeout_ms: int = 30000, render_timeout_ms: int = 30000):
        self.load_timeout_ms = load_timeout_ms
        self.render_timeout_ms = render_timeout_ms

    def generate_pdf(self, html: str) -> bytes:
        try:
            from playwright.sync_api import sync_playwright, Error as PlaywrightError
        except ImportError as e:
            raise RenderFault(
                "Playwright is not installed. Install it with:\n"
                "  pip install playwright && python -m playwright install chromium"
            ) from e

        logger.info("Rendering PDF with local headless browser...")
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(headless=True, args=BROWSER_ARGS)
                page = None
                try:
                    page = browser.new_page(viewport={"width": 1280, "height": 720})
                    page.set_default_timeout(self.render_timeout_ms)
                    page.set_content(html, wait_until="domcontentloaded", timeout=self.load_timeout_ms)
                    return page.pdf(
                        format="Letter",
                        print_background=True,
                        prefer_css_page_size=False,
                        margin={"top": PRINT_MARGIN, "right": PRINT_MARGIN,
                                "bottom": PRINT_MARGIN, "left": PRINT_MARGIN},
                    )
                finally:
                    self._cleanup(page, browser, PlaywrightError)
        except PlaywrightError as e:
            raise RenderFault(f"Local PDF rendering failed: {e}") from e

    @staticmethod
    def _cleanup(page, browser, error_type):
        try:
            if page is not None:
                page.close()
        except error_type as e:
            logger.warning(f"Error closing page: {e}")
        try:
            browser.close()
        except error_type as e:
            logger.warning(f"Error closing browser: {e}")
        logger.debug("    > Browser cleanup completed")


def save_pdf(resume: Resume, output_dir: str, renderer=None) -> Path:
    """
    Renders the resume to HTML, converts it and writes <file_name>.pdf.

    Args:
        resume (Resume): The resume to export.
        output_dir (str): Target directory.
        renderer: Anything with generate_pdf(html) -> bytes. Defaults to the
            remote service when a URL is configured, else the local browser.
    """
    if renderer is None:
        client = PdfServiceClient()
        renderer = client if client.url else LocalPdfRenderer()

    pdf_bytes = renderer.generate_pdf(render_html(resume))
    path = Path(output_dir) / f"{resume.file_name}.pdf"
    path.write_bytes(pdf_bytes)
    logger.info(f"PDF generated successfully: {path}")
    return path
