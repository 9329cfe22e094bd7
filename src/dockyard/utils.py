"""Utility functions for Dockyard"""

import logging
import random
import re
from pathlib import Path
from typing import Mapping
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

ORG_PREFIXES = [
    "Nova", "Quantum", "Apex", "Nimbus", "Vertex", "Summit",
    "Atlas", "Orion", "Zenith", "Horizon", "Pulse", "Elevate",
    "Stellar", "Crescent", "Forge", "Echo", "Element", "Infinitum",
]

ORG_SUFFIXES = [
    "Labs", "Systems", "Solutions", "Technologies", "Dynamics",
    "Innovations", "Ventures", "Industries", "Works", "Collective",
    "Partners", "Global", "Networks",
]

PROJECT_PREFIXES = ["Project", "Operation", "Mission", "Codename", "Initiative", "Program"]

PROJECT_CORES = [
    "Helix", "Odyssey", "Aurora", "Falcon", "Vertex", "Orion",
    "Pulse", "Neural", "Eclipse", "Momentum", "Phoenix", "Catalyst",
    "Spectrum", "Horizon", "Nova", "Prism", "Axon", "Vector",
]

PROJECT_SUFFIXES = ["AI", "Engine", "Platform", "Suite", "Framework", "OS", "Core", "Cloud"]

_VALID_NAME = re.compile(r"^(?=.*[A-Za-z])[A-Za-z0-9 ]+$")


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize(sensitive: str | None, keep_chars: int = 2) -> str:
    """Mask sensitive information for logging.

    Args:
        sensitive: The sensitive string to mask (e.g., token, API key)
        keep_chars: Number of leading and trailing characters to keep

    Returns:
        Masked string with middle characters replaced by asterisks.

    Examples:
        >>> sanitize("eyJhbGciOiJIUzI1NiJ9")
        'ey***J9'
        >>> sanitize(None)
        '***'
    """
    if not sensitive:
        return "***"

    if len(sensitive) <= keep_chars * 2:
        return "***"

    return f"{sensitive[:keep_chars]}***{sensitive[-keep_chars:]}"


def to_query_string(params: Mapping[str, str | int | float | bool | None]) -> str:
    """Build a ``?key=value`` query string, skipping falsy values.

    Spaces are encoded as ``%20`` rather than ``+``.

    Examples:
        >>> to_query_string({"name": "acme labs", "page": 2, "empty": ""})
        '?name=acme%20labs&page=2'
    """
    pairs = [(key, str(value)) for key, value in params.items() if value]
    return "?" + urlencode(pairs).replace("+", "%20")


def has_valid_character(text: str) -> bool:
    """Letters, digits and spaces only, with at least one letter."""
    return bool(_VALID_NAME.match(text))


def generate_organization_name(rng: random.Random | None = None) -> str:
    rng = rng or random
    return f"{rng.choice(ORG_PREFIXES)} {rng.choice(ORG_SUFFIXES)}"


def generate_project_name(rng: random.Random | None = None) -> str:
    rng = rng or random
    pattern = rng.randrange(3)
    prefix = rng.choice(PROJECT_PREFIXES)
    core = rng.choice(PROJECT_CORES)
    suffix = rng.choice(PROJECT_SUFFIXES)

    match pattern:
        case 0:
            return f"{prefix} {core}"
        case 1:
            return f"{core} {suffix}"
        case _:
            return f"{prefix} {core} {suffix}"
