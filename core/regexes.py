"""Shared regular expressions for form field format checks."""

from __future__ import annotations

import re

EMAIL_SHAPE_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
"""Loose ``local@domain.tld`` shape; deliverability is not checked."""

PHONE_CHARS_RE = re.compile(r"^[\d\s\-+()]+$")
"""Digits plus the separators people type into phone inputs."""

NON_DIGIT_RE = re.compile(r"\D")

MIN_PHONE_DIGITS = 10
