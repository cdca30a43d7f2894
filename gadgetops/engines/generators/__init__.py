"""
Generators - randomized identities and codes for gadget transitions.

- Codenames: "<Adjective> <Noun>" assigned at gadget creation
- Confirmation codes: 6-character A-Z0-9 codes returned on self-destruct
"""

from gadgetops.engines.generators.codename import CodenameGenerator, ADJECTIVES, NOUNS
from gadgetops.engines.generators.confirmation import (
    ConfirmationCodeGenerator,
    CODE_ALPHABET,
    CODE_LENGTH,
)

__all__ = [
    "CodenameGenerator",
    "ADJECTIVES",
    "NOUNS",
    "ConfirmationCodeGenerator",
    "CODE_ALPHABET",
    "CODE_LENGTH",
]
