
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
Main entry point for the resume-forge CLI.
"""

import argparse
import sys
import logging
from pathlib import Path

from collections import deque

from resume_forge.editor import ResumeEditor
from resume_forge.errors import ResumeError, StructureError
from resume_forge.docx_renderer import save_docx
from resume_forge.exporter import save_markdown
from resume_forge.html_renderer import save_html
from resume_forge.pdf_service import PdfServiceClient, LocalPdfRenderer, save_pdf
from resume_forge.ssl_helpers import set_ca_bundle_override

logger = logging.getLogger(__name__)

FORMATS = ("pdf", "docx", "md", "html")
DEFAULT_FORMATS = "docx,md"
DEFAULT_OUTPUT_DIR = "user_content/generated"


class StatusLogHandler(logging.Handler):
    """
    Keeps the last N log lines for a scrolling status display.
    """
    def __init__(self, console, maxlen=5):
        super().__init__()
        self.console = console
        self.maxlen = maxlen
        self.logs = deque(maxlen=maxlen)
        self.live = None

    def emit(self, record):
        try:
            msg = self.format(record)
            self.logs.append(msg)
            if self.live:
                self.live.update(self.get_renderable())
        except Exception:
            self.handleError(record)

    def get_renderable(self):
        from rich.text import Text
        return Text("\n".join(self.logs), style="dim grey50")


def setup_logging(verbosity: int, quiet: bool = False, custom_handler: logging.Handler = None):
    """
    Configures logging:
    - File: user_content/logs/resume.log (DEBUG)
    - Console: -v=WARNING, -vv=INFO, -vvv=DEBUG, -q or none=ERROR
    """
    log_dir = Path("user_content/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "resume.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet or verbosity <= 0:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.WARNING
    elif verbosity == 2:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = custom_handler or logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(handler)

    if verbosity < 3:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_formats(value: str):
    formats = [f.strip().lower() for f in value.split(",") if f.strip()]
    unknown = [f for f in formats if f not in FORMATS]
    if unknown or not formats:
        raise argparse.ArgumentTypeError(
            f"unknown format(s) {', '.join(unknown) or '(none)'}; choose from {', '.join(FORMATS)}"
        )
    return formats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resume builder: Markdown in, DOCX/PDF/Markdown/HTML out")
    parser.add_argument("--input", help="Markdown resume to import (omit to start from the default template)")
    parser.add_argument("--format", type=parse_formats, default=parse_formats(DEFAULT_FORMATS),
                        help=f"Comma-separated output formats from {','.join(FORMATS)} (default: {DEFAULT_FORMATS})")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="Directory for generated files")
    parser.add_argument("--file-name", help="Base name for generated files (default: taken from the resume)")
    parser.add_argument("--margins", type=float, choices=(1.0, 0.5), help="Page margins in inches")
    parser.add_argument("--sort-section", action="append", default=[], metavar="TITLE",
                        help="Sort a section's entries newest first (repeatable)")
    parser.add_argument("--pdf-service", help="URL of the HTML to PDF service (env: RESUME_PDF_SERVICE_URL)")
    parser.add_argument("--pdf-timeout", type=float, help="PDF service timeout in seconds (env: RESUME_PDF_TIMEOUT, default 60)")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=WARNING, -vv=INFO, -vvv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")
    return parser


def main():
    try:
        _main_cli()
    except KeyboardInterrupt:
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.ca_bundle:
        set_ca_bundle_override(args.ca_bundle)

    if args.quiet:
        setup_logging(0, quiet=True)
        _run_safely(args)
    elif args.verbose == 0:
        # Default mode: rich status log if available
        try:
            from rich.console import Console
            from rich.live import Live
        except ImportError:
            setup_logging(2)
            _run_safely(args)
            return

        console = Console()
        status_handler = StatusLogHandler(console)
        setup_logging(2, custom_handler=status_handler)
        with Live(status_handler.get_renderable(), refresh_per_second=4, console=console) as live:
            status_handler.live = live
            _run_safely(args)
    else:
        setup_logging(args.verbose)
        _run_safely(args)


def _run_safely(args):
    logger.info("--- resume-forge ---")
    try:
        written = _run_main_logic(args)
    except (ResumeError, OSError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    for path in written:
        logger.info(f"    > {path}")
    logger.info("Done!")


def _find_section_id(editor: ResumeEditor, title: str) -> str:
    for section in editor.resume.sections:
        if section.title.strip().lower() == title.strip().lower():
            return section.id
    raise StructureError(f"No section titled '{title}'")


def _run_main_logic(args):
    """
    Loads (or creates) the resume, applies CLI edits and writes each requested format.

    Returns:
        list[Path]: The files written, in format order.
    """
    editor = ResumeEditor()
    if args.input:
        logger.info(f"Importing resume from: {args.input}")
        editor.import_file(args.input)
    else:
        logger.info("No input given, using the default template")

    if args.file_name:
        editor.update_field("file_name", args.file_name)
    if args.margins:
        editor.update_field("page_margins", args.margins)
    for title in args.sort_section:
        logger.info(f"Sorting entries in '{title}' by date")
        editor.sort_entries(_find_section_id(editor, title))

    resume = editor.resume
    output_dir = Path(args.output_dir)
    if not output_dir.exists():
        output_dir.mkdir(parents=True)
        logger.info(f"Created output directory: {output_dir}")

    written = []
    for fmt in args.format:
        logger.info(f"Generating {fmt.upper()}...")
        if fmt == "docx":
            written.append(save_docx(resume, output_dir))
        elif fmt == "md":
            written.append(save_markdown(resume, output_dir))
        elif fmt == "html":
            written.append(save_html(resume, output_dir))
        elif fmt == "pdf":
            client = PdfServiceClient(url=args.pdf_service, timeout=args.pdf_timeout)
            renderer = client if client.url else LocalPdfRenderer()
            written.append(save_pdf(resume, output_dir, renderer=renderer))
    return written


if __name__ == "__main__":
    main()
