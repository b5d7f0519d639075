# -*- coding: utf-8 -*-
"""Analysis — error taxonomy.

Every failure of the analysis pipeline is one of these kinds. The HTTP layer
maps ``status_code`` onto the response so callers can tell causes apart.
"""

from __future__ import annotations

from typing import Optional


class AnalysisError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(AnalysisError):
    status_code = 500


class InvalidRequest(AnalysisError):
    status_code = 400


class UpstreamError(AnalysisError):
    status_code = 502

    def __init__(self, message: str, *, status_code_upstream: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code_upstream = status_code_upstream
        self.body = body


class ParseError(AnalysisError):
    status_code = 500

    def __init__(self, message: str, *, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class SchemaError(AnalysisError):
    status_code = 400
