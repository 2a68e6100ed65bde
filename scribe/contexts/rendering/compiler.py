"""
Markup Compilation Module

Turns LaTeX or Typst markup into PDF bytes. Backends are black boxes: markup
in, PDF bytes or a diagnostic out. Compilation failures never raise; they come
back as a failed CompilationResult carrying the compiler's own output,
truncated. Nothing is retried automatically.
"""

import itertools
import json
import os
import re
import subprocess
import tempfile
import time
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from http.client import HTTPException
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from dotenv import load_dotenv

from scribe.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from scribe.contexts.templating.markup_patterns import TypstCommands
from scribe.utils.pdf_processing import looks_like_pdf, page_count

load_dotenv()

LATEX_SERVICE_URL = os.getenv("LATEX_SERVICE_URL", "https://latex.ytotech.com/builds/sync")
LATEX_SERVICE_TIMEOUT = float(os.getenv("LATEX_SERVICE_TIMEOUT", "30"))
LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
TYPST_COMPILER = os.getenv("TYPST_COMPILER", "typst")
SCRIBE_COMPILER = os.getenv("SCRIBE_COMPILER", "")

# Diagnostics are surfaced verbatim up to this many characters
MAX_DIAGNOSTIC_LENGTH = 500

# Compiler used for each dialect when none is configured
DEFAULT_COMPILERS = {"latex": "remote-latex", "typst": "local-typst"}


@dataclass
class CompilationResult:
    """
    Result of compiling markup to PDF.

    Attributes:
        success: Whether compilation succeeded
        pdf_bytes: Generated PDF (None if failed)
        errors: Parsed or summarized errors
        warnings: Parsed warnings
        diagnostic: Raw compiler/service output, truncated
        page_count: Number of pages in generated PDF (None if not available)
        elapsed_s: Wall-clock compilation time
    """

    success: bool
    pdf_bytes: Optional[bytes] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    diagnostic: str = ""
    page_count: Optional[int] = None
    elapsed_s: float = 0.0


def truncate_diagnostic(text: str) -> str:
    return text[:MAX_DIAGNOSTIC_LENGTH]


def _failure(error: str, diagnostic: str = "") -> CompilationResult:
    return CompilationResult(
        success=False, errors=[error], diagnostic=truncate_diagnostic(diagnostic or error)
    )


_LATEX_ERROR_RE = re.compile(r"^! (.+)$", re.MULTILINE)
# Fatal messages that file-line-error mode prints without the "!" marker
_LATEX_BARE_ERROR_RE = re.compile(
    r"((?:Undefined control sequence|File ended while scanning use of|Emergency stop).*)$",
    re.MULTILINE,
)
_LATEX_WARNING_RES = (
    re.compile(r"^(?:LaTeX|Package \w+) Warning: (.+)$", re.MULTILINE),
    re.compile(r"^(?:Over|Under)full \\hbox \((.+?)\)", re.MULTILINE),
)
_TYPST_DIAGNOSTIC_RE = re.compile(r"^(error|warning): (.+)$", re.MULTILINE)


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """Errors and warnings from a LaTeX .log file, in order of appearance."""
    errors: List[str] = []
    for match in itertools.chain(
        _LATEX_ERROR_RE.finditer(log_content), _LATEX_BARE_ERROR_RE.finditer(log_content)
    ):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    warnings = [
        match.group(1).strip()
        for pattern in _LATEX_WARNING_RES
        for match in pattern.finditer(log_content)
    ]
    return errors, warnings


def _parse_typst_output(output: str) -> Tuple[List[str], List[str]]:
    """Errors and warnings from typst CLI stderr."""
    found: Dict[str, List[str]] = {"error": [], "warning": []}
    for severity, message in _TYPST_DIAGNOSTIC_RE.findall(output):
        found[severity].append(message.strip())
    return found["error"], found["warning"]

class Compiler(ABC):
    """
    Base class for compiler backends.

    Attributes:
        name: Backend name used for registry lookup
        dialect: Markup dialect the backend accepts ("latex" or "typst")
    """

    name: str = ""
    dialect: str = ""

    @abstractmethod
    def _compile(self, markup: str, data: Optional[str] = None) -> CompilationResult: ...

    def compile(self, markup: str, data: Optional[str] = None) -> CompilationResult:
        """
        Compile markup to PDF.

        Args:
            markup: Complete markup document
            data: Optional structured data for backends that inline it (Typst)

        Returns:
            CompilationResult; failures are reported, never raised
        """
        log_compilation_start(self.name, len(markup), getattr(self, "num_passes", 1))
        start = time.perf_counter()
        result = self._compile(markup, data)
        result.elapsed_s = time.perf_counter() - start

        if result.success and result.pdf_bytes and result.page_count is None:
            result.page_count = page_count(result.pdf_bytes)

        log_compilation_result(self.name, result)
        return result


_registry: Dict[str, Type[Compiler]] = {}


class CompilerRegistry:
    @staticmethod
    def register(name: str):
        def decorator(cls: Type[Compiler]) -> Type[Compiler]:
            _registry[name] = cls
            return cls

        return decorator

    @staticmethod
    def get(name: str) -> Type[Compiler]:
        if name not in _registry:
            available = ", ".join(sorted(_registry.keys()))
            raise KeyError(f"Compiler '{name}' not found. Available: {available}")
        return _registry[name]

    @staticmethod
    def list_names() -> List[str]:
        return sorted(_registry.keys())


@CompilerRegistry.register("remote-latex")
class RemoteLatexCompiler(Compiler):
    """
    Compiles LaTeX through an HTTP compilation service.

    Sends {"compiler": "pdflatex", "resources": [{"main": true, "content": ...}]}
    and expects the PDF back with Content-Type application/pdf.
    """

    name = "remote-latex"
    dialect = "latex"

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        self.url = url or LATEX_SERVICE_URL
        self.timeout = timeout if timeout is not None else LATEX_SERVICE_TIMEOUT

    def _build_request(self, markup: str) -> urllib.request.Request:
        payload = {
            "compiler": "pdflatex",
            "resources": [{"main": True, "content": markup}],
        }
        return urllib.request.Request(
            self.url,
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )

    def _compile(self, markup: str, data: Optional[str] = None) -> CompilationResult:
        request = self._build_request(markup)
        _log_debug(f"POST {self.url}")

        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                content_type = response.headers.get("Content-Type", "")
                body = response.read()
        except urllib.error.HTTPError as e:
            text = e.read().decode("utf-8", errors="replace")
            return _failure(f"LaTeX service returned HTTP {e.code}", text)
        except urllib.error.URLError as e:
            return _failure(f"LaTeX service unreachable: {e.reason}")
        except (OSError, HTTPException) as e:
            return _failure(f"LaTeX service request failed: {e}")

        if "application/pdf" not in content_type.lower():
            text = body.decode("utf-8", errors="replace")
            return _failure("LaTeX compilation failed", text)

        return CompilationResult(success=True, pdf_bytes=body)


@CompilerRegistry.register("local-latex")
class LocalLatexCompiler(Compiler):
    """
    Compiles LaTeX with a local engine (pdflatex by default) in a scratch directory.

    Multiple passes resolve cross-references; the .log file is parsed for
    errors and warnings.
    """

    name = "local-latex"
    dialect = "latex"

    def __init__(
        self,
        executable: Optional[str] = None,
        num_passes: int = 2,
        timeout: Optional[float] = 120,
    ):
        self.executable = executable or LATEX_COMPILER
        self.num_passes = num_passes
        self.timeout = timeout

    def _compile(self, markup: str, data: Optional[str] = None) -> CompilationResult:
        with tempfile.TemporaryDirectory(prefix="scribe_latex_") as tmp:
            compile_dir = Path(tmp)
            tex_file = compile_dir / "resume.tex"
            tex_file.write_text(markup, encoding="utf-8")

            all_stdout = []
            for _ in range(self.num_passes):
                cmd = [
                    self.executable,
                    "-interaction=nonstopmode",
                    "-file-line-error",
                    tex_file.name,
                ]
                try:
                    result = subprocess.run(
                        cmd,
                        cwd=compile_dir,
                        capture_output=True,
                        text=True,
                        encoding="utf-8",
                        errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
                        timeout=self.timeout,
                    )
                except FileNotFoundError:
                    return _failure(f"LaTeX compiler not found: {self.executable}")
                except subprocess.TimeoutExpired:
                    return _failure(f"LaTeX compilation timed out after {self.timeout}s")
                except OSError as e:
                    return _failure(f"Could not run LaTeX compiler {self.executable}: {e}")

                all_stdout.append(result.stdout)
                # Non-zero means a fatal error; the log distinguishes errors from warnings
                if result.returncode != 0:
                    break

            errors: List[str] = []
            warnings: List[str] = []
            log_file = compile_dir / f"{tex_file.stem}.log"
            if log_file.exists():
                # pdflatex writes log files in latin-1 (font metadata is not UTF-8)
                errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

            diagnostic = truncate_diagnostic("\n".join(all_stdout))
            pdf_path = compile_dir / f"{tex_file.stem}.pdf"
            if not pdf_path.exists():
                return CompilationResult(
                    success=False,
                    errors=errors or ["PDF file was not generated"],
                    warnings=warnings,
                    diagnostic=diagnostic,
                )

            # PDF exists: errors decide success even if the engine exited non-zero
            pdf_bytes = pdf_path.read_bytes()
            return CompilationResult(
                success=not errors,
                pdf_bytes=pdf_bytes if not errors else None,
                errors=errors,
                warnings=warnings,
                diagnostic=diagnostic,
            )


@CompilerRegistry.register("local-typst")
class LocalTypstCompiler(Compiler):
    """
    Compiles Typst with the typst CLI.

    When structured data is given it replaces the template's "__RESUME_DATA__"
    slot before compiling.
    """

    name = "local-typst"
    dialect = "typst"

    def __init__(self, executable: Optional[str] = None, timeout: Optional[float] = 60):
        self.executable = executable or TYPST_COMPILER
        self.timeout = timeout

    def _compile(self, markup: str, data: Optional[str] = None) -> CompilationResult:
        if data is not None:
            markup = markup.replace(TypstCommands.DATA_SLOT, data, 1)

        with tempfile.TemporaryDirectory(prefix="scribe_typst_") as tmp:
            compile_dir = Path(tmp)
            source = compile_dir / "resume.typ"
            output = compile_dir / "resume.pdf"
            source.write_text(markup, encoding="utf-8")

            cmd = [self.executable, "compile", source.name, output.name]
            try:
                result = subprocess.run(
                    cmd,
                    cwd=compile_dir,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                return _failure(f"Typst compiler not found: {self.executable}")
            except subprocess.TimeoutExpired:
                return _failure(f"Typst compilation timed out after {self.timeout}s")
            except OSError as e:
                return _failure(f"Could not run Typst compiler {self.executable}: {e}")

            errors, warnings = _parse_typst_output(result.stderr)
            diagnostic = truncate_diagnostic(result.stderr)

            if result.returncode != 0 or not output.exists():
                return CompilationResult(
                    success=False,
                    errors=errors or [f"typst exited with status {result.returncode}"],
                    warnings=warnings,
                    diagnostic=diagnostic,
                )

            pdf_bytes = output.read_bytes()
            if not looks_like_pdf(pdf_bytes):
                return _failure("typst produced output that is not a PDF", diagnostic)

            return CompilationResult(
                success=True, pdf_bytes=pdf_bytes, warnings=warnings, diagnostic=diagnostic
            )


def get_compiler(name: Optional[str] = None, dialect: str = "latex") -> Compiler:
    """
    Create a compiler backend.

    Args:
        name: Backend name ("remote-latex", "local-latex", "local-typst"). Defaults
              to SCRIBE_COMPILER when it matches the dialect, else the
              dialect's default backend
        dialect: Markup dialect used to pick the default backend

    Returns:
        Compiler instance

    Raises:
        KeyError: If the backend name is unknown
    """
    if name is None:
        # A configured backend only applies to the dialect it compiles
        if SCRIBE_COMPILER and CompilerRegistry.get(SCRIBE_COMPILER).dialect == dialect:
            name = SCRIBE_COMPILER
        else:
            name = DEFAULT_COMPILERS.get(dialect, "remote-latex")
    return CompilerRegistry.get(name)()
