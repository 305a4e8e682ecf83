"""
Leanpub Book Configuration Fetcher

A Python CLI tool that retrieves a Leanpub book's configuration metadata
and prints it as formatted JSON.
"""

__version__ = "1.0.0"

from .config import Config
from .leanpub_client import (
    CandidatesExhaustedError,
    InvalidResponseError,
    LeanpubClient,
    LeanpubError,
)
from .main import main, run

__all__ = [
    "main",
    "run",
    "Config",
    "LeanpubClient",
    "LeanpubError",
    "InvalidResponseError",
    "CandidatesExhaustedError",
]
