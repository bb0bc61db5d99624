"""Core ABACUS functionality: IR, tokenizer, parser, evaluator, text boundary, configuration."""

from . import ir
from .calculator import SelfTestFailure, calculate, evaluate_text, run_self_test
from .errors import (
    AbacusError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    FormulaSyntaxError,
    InternalError,
    MathError,
)
from .manifest import ProjectManifest, load_manifest, resolve_manifest

__all__ = [
    "ir",
    "AbacusError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "FormulaSyntaxError",
    "InternalError",
    "MathError",
    "ProjectManifest",
    "SelfTestFailure",
    "calculate",
    "evaluate_text",
    "load_manifest",
    "resolve_manifest",
    "run_self_test",
]
