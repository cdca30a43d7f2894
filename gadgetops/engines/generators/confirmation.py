"""
Confirmation Code Generator - display-only codes for self-destruct.
"""

import random
import secrets
import string
from typing import Optional

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits


class ConfirmationCodeGenerator:
    """Random uppercase alphanumeric codes. Never stored or checked."""

    def __init__(self, rng: Optional[random.Random] = None, length: int = CODE_LENGTH):
        self.rng = rng or secrets.SystemRandom()
        self.length = length

    def generate(self) -> str:
        return "".join(self.rng.choice(CODE_ALPHABET) for _ in range(self.length))
