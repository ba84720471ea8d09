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

import os
import shutil
import sys
import tempfile
import types
import unittest
from unittest.mock import patch, MagicMock

import requests

from resume_forge import pdf_service
from resume_forge.errors import RenderFault
from resume_forge.models import default_resume
from resume_forge.pdf_service import LocalPdfRenderer, PdfServiceClient, save_pdf

SERVICE_URL = "https://pdf.example.com/generate"


def _response(status=200, content_type="application/pdf", content=b"%PDF-1.4 test", json_body=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.headers = {"content-type": content_type}
    response.content = content
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


class TestPdfServiceClient(unittest.TestCase):
    def setUp(self):
        self.env = patch.dict(os.environ, {}, clear=True)
        self.env.start()
        self.client = PdfServiceClient(url=SERVICE_URL, timeout=5)

    def tearDown(self):
        self.env.stop()

    @patch('resume_forge.pdf_service.requests.post')
    def test_success_returns_pdf_bytes(self, mock_post):
        mock_post.return_value = _response()

        pdf = self.client.generate_pdf("<html>resume</html>")

        self.assertEqual(pdf, b"%PDF-1.4 test")
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], SERVICE_URL)
        self.assertEqual(kwargs["json"], {"html": "<html>resume</html>"})
        self.assertEqual(kwargs["timeout"], 5.0)
        self.assertIs(kwargs["verify"], True)

    @patch('resume_forge.pdf_service.requests.post')
    def test_service_ca_bundle_is_used_for_verify(self, mock_post):
        mock_post.return_value = _response()
        with patch.dict(os.environ, {"RESUME_PDF_CA_BUNDLE": "/path/resume.pem"}):
            self.client.generate_pdf("<html></html>")
        self.assertEqual(mock_post.call_args.kwargs["verify"], "/path/resume.pem")

    @patch('resume_forge.pdf_service.requests.post')
    def test_structured_error_uses_service_message(self, mock_post):
        mock_post.return_value = _response(
            status=500, content_type="application/json",
            json_body={"message": "Chromium crashed", "error": "Target closed"},
        )

        with self.assertRaises(RenderFault) as ctx:
            self.client.generate_pdf("<html></html>")
        self.assertEqual(str(ctx.exception), "Chromium crashed")
        self.assertTrue(ctx.exception.structured)
        self.assertEqual(ctx.exception.status_code, 500)

    @patch('resume_forge.pdf_service.requests.post')
    def test_structured_error_without_message(self, mock_post):
        mock_post.return_value = _response(status=500, content_type="application/json", json_body={})

        with self.assertRaises(RenderFault) as ctx:
            self.client.generate_pdf("<html></html>")
        self.assertEqual(str(ctx.exception), pdf_service.GENERIC_SERVER_FAILURE)

    @patch('resume_forge.pdf_service.requests.post')
    def test_html_error_page_is_opaque(self, mock_post):
        mock_post.return_value = _response(
            status=502, content_type="text/html",
            text="<html><body><h1>Bad Gateway</h1><script>x()</script></body></html>",
        )

        with self.assertLogs("resume_forge.pdf_service", level="ERROR") as logs:
            with self.assertRaises(RenderFault) as ctx:
                self.client.generate_pdf("<html></html>")
        self.assertEqual(str(ctx.exception), pdf_service.OPAQUE_FAILURE)
        self.assertFalse(ctx.exception.structured)
        self.assertIn("Bad Gateway", logs.output[0])
        self.assertNotIn("x()", logs.output[0])

    @patch('resume_forge.pdf_service.requests.post')
    def test_ok_status_but_not_pdf(self, mock_post):
        mock_post.return_value = _response(status=200, content_type="text/html", text="<p>login</p>")

        with self.assertRaises(RenderFault) as ctx:
            self.client.generate_pdf("<html></html>")
        self.assertEqual(str(ctx.exception), pdf_service.OPAQUE_FAILURE)

    @patch('resume_forge.pdf_service.requests.post')
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("slow")
        with self.assertRaises(RenderFault):
            self.client.generate_pdf("<html></html>")

    @patch('resume_forge.pdf_service.requests.post')
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(RenderFault) as ctx:
            self.client.generate_pdf("<html></html>")
        self.assertIn("unreachable", str(ctx.exception))

    @patch('resume_forge.pdf_service.requests.post')
    def test_no_url_configured(self, mock_post):
        with self.assertRaises(RenderFault):
            PdfServiceClient().generate_pdf("<html></html>")
        mock_post.assert_not_called()

    def test_environment_fallbacks(self):
        with patch.dict(os.environ, {"RESUME_PDF_SERVICE_URL": SERVICE_URL, "RESUME_PDF_TIMEOUT": "12"}):
            client = PdfServiceClient()
        self.assertEqual(client.url, SERVICE_URL)
        self.assertEqual(client.timeout, 12.0)
        self.assertEqual(PdfServiceClient().timeout, pdf_service.DEFAULT_TIMEOUT)

    def test_invalid_timeout_is_render_fault(self):
        with patch.dict(os.environ, {"RESUME_PDF_TIMEOUT": "soon"}):
            with self.assertRaises(RenderFault) as ctx:
                PdfServiceClient(url=SERVICE_URL)
        self.assertIn("soon", str(ctx.exception))
        with self.assertRaises(RenderFault):
            PdfServiceClient(url=SERVICE_URL, timeout=-1)


class FakePlaywrightError(Exception):
    pass


class TestLocalPdfRenderer(unittest.TestCase):
    def setUp(self):
        self.sync_playwright = MagicMock()
        p = self.sync_playwright.return_value.__enter__.return_value
        self.browser = p.chromium.launch.return_value
        self.page = self.browser.new_page.return_value
        self.page.pdf.return_value = b"%PDF-local"

        sync_api = types.ModuleType("playwright.sync_api")
        sync_api.sync_playwright = self.sync_playwright
        sync_api.Error = FakePlaywrightError
        self.modules = patch.dict(sys.modules, {
            "playwright": types.ModuleType("playwright"),
            "playwright.sync_api": sync_api,
        })
        self.modules.start()

    def tearDown(self):
        self.modules.stop()

    def test_renders_letter_pdf_and_cleans_up(self):
        pdf = LocalPdfRenderer().generate_pdf("<html>resume</html>")

        self.assertEqual(pdf, b"%PDF-local")
        self.page.set_content.assert_called_once_with(
            "<html>resume</html>", wait_until="domcontentloaded", timeout=30000
        )
        kwargs = self.page.pdf.call_args.kwargs
        self.assertEqual(kwargs["format"], "Letter")
        self.assertTrue(kwargs["print_background"])
        self.assertEqual(kwargs["margin"]["top"], "0.5in")
        self.page.close.assert_called_once()
        self.browser.close.assert_called_once()

    def test_failure_is_render_fault_and_still_cleans_up(self):
        self.page.set_content.side_effect = FakePlaywrightError("load timed out")

        with self.assertRaises(RenderFault):
            LocalPdfRenderer().generate_pdf("<html></html>")
        self.page.close.assert_called_once()
        self.browser.close.assert_called_once()

    def test_close_errors_are_logged_not_raised(self):
        self.page.close.side_effect = FakePlaywrightError("already closed")

        with self.assertLogs("resume_forge.pdf_service", level="WARNING"):
            pdf = LocalPdfRenderer().generate_pdf("<html></html>")
        self.assertEqual(pdf, b"%PDF-local")
        self.browser.close.assert_called_once()

    def test_missing_playwright(self):
        with patch.dict(sys.modules, {"playwright": None, "playwright.sync_api": None}):
            with self.assertRaises(RenderFault) as ctx:
                LocalPdfRenderer().generate_pdf("<html></html>")
        self.assertIn("Playwright is not installed", str(ctx.exception))


class TestSavePdf(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_writes_renderer_output(self):
        renderer = MagicMock()
        renderer.generate_pdf.return_value = b"%PDF-fake"

        path = save_pdf(default_resume(), self.test_dir, renderer=renderer)

        self.assertEqual(path.name, "Your_Name_Resume.pdf")
        self.assertEqual(path.read_bytes(), b"%PDF-fake")
        html = renderer.generate_pdf.call_args.args[0]
        self.assertIn("Your Name", html)

    @patch('resume_forge.pdf_service.requests.post')
    def test_uses_service_when_configured(self, mock_post):
        mock_post.return_value = _response(content=b"%PDF-remote")
        with patch.dict(os.environ, {"RESUME_PDF_SERVICE_URL": SERVICE_URL}, clear=True):
            path = save_pdf(default_resume(), self.test_dir)
        self.assertEqual(path.read_bytes(), b"%PDF-remote")

    def test_failure_writes_nothing(self):
        renderer = MagicMock()
        renderer.generate_pdf.side_effect = RenderFault("down")
        with self.assertRaises(RenderFault):
            save_pdf(default_resume(), self.test_dir, renderer=renderer)
        self.assertEqual(os.listdir(self.test_dir), [])


if __name__ == '__main__':
    unittest.main()
