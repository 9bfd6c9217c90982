"""Core package for the Get Featured field registry and configuration errors."""

from .errors import FormConfigError, FormEngineError
from .form_config import FieldRegistry, build_registry

__all__ = ["FieldRegistry", "FormConfigError", "FormEngineError", "build_registry"]
