from typing import Any, Dict, Optional
from .exceptions import ConfigurationError

REDACTED = "***"

def validate_string(value: Optional[Any], name: str = "value", strip: bool = True) -> str:
    """Validate a required string value, stripping it unless strip is False."""
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not value or not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} is required")
    return value.strip() if strip else value

def validate_int(value: Any, name: str, minimum: int = 0) -> int:
    """Validate an integer knob against a lower bound."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}")
    return value

def merge_dicts(dict1: Dict[str, Any], dict2: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""
    result = dict1.copy()
    
    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
            
    return result

def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of headers safe for printing."""
    return {
        key: (REDACTED if key.lower() in ("authorization", "cookie") else value)
        for key, value in headers.items()
    }
