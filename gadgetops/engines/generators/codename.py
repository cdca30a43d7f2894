"""
Codename Generator - two-word display names for new gadgets.
"""

import random
import secrets
from typing import Optional, Sequence

ADJECTIVES: tuple[str, ...] = (
    "amber", "ancient", "arctic", "ashen", "atomic", "azure", "bitter", "black",
    "blazing", "blind", "bold", "brass", "brave", "broken", "bronze", "burning",
    "calm", "clever", "cobalt", "cold", "copper", "crimson", "crooked", "crystal",
    "cunning", "dark", "daring", "dawn", "deep", "desert", "distant", "dusky",
    "eager", "electric", "emerald", "empty", "fallen", "feral", "fierce", "final",
    "flying", "frozen", "gentle", "ghostly", "gilded", "glass", "golden", "grave",
    "grey", "hidden", "hollow", "humble", "iron", "ivory", "jade", "last",
    "lone", "lucky", "lunar", "marble", "midnight", "mighty", "misty", "molten",
    "nimble", "noble", "obsidian", "onyx", "pale", "phantom", "polar", "proud",
    "quiet", "radiant", "rapid", "restless", "rogue", "royal", "rusty", "sable",
    "savage", "scarlet", "secret", "serene", "shadow", "sharp", "silent", "silver",
    "sleek", "solar", "steady", "steel", "stone", "swift", "thunder", "twilight",
    "velvet", "vivid", "wandering", "wicked", "wild", "winter", "wise", "young",
)

NOUNS: tuple[str, ...] = (
    "anchor", "arrow", "badger", "beacon", "blade", "bolt", "cipher", "cobra",
    "comet", "compass", "condor", "coyote", "crane", "crow", "dagger", "dragon",
    "eagle", "echo", "ember", "falcon", "fang", "ferret", "flare", "fox",
    "gambit", "garnet", "ghost", "glacier", "griffin", "harbor", "hawk", "heron",
    "hornet", "hound", "hunter", "jackal", "jaguar", "kestrel", "lantern", "lynx",
    "mamba", "mantis", "meteor", "mirage", "mongoose", "nebula", "needle", "nomad",
    "oracle", "orbit", "osprey", "otter", "owl", "panther", "paragon", "phoenix",
    "pilot", "prism", "puma", "quasar", "raven", "reaper", "ridge", "rook",
    "sabre", "scorpion", "sentinel", "serpent", "shark", "shield", "sparrow", "specter",
    "sphinx", "spider", "spire", "stallion", "storm", "talon", "tempest", "thorn",
    "tiger", "titan", "torch", "tracker", "trident", "viper", "vortex", "vulture",
    "warden", "wasp", "whisper", "wolf", "wolverine", "wraith", "wyvern", "zephyr",
)


class CodenameGenerator:
    """
    Produces "<Adjective> <Noun>" codenames, each word capitalized.

    Names are not checked against existing gadgets; collisions are allowed.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        adjectives: Sequence[str] = ADJECTIVES,
        nouns: Sequence[str] = NOUNS,
    ):
        self.rng = rng or secrets.SystemRandom()
        self.adjectives = adjectives
        self.nouns = nouns

    def generate(self) -> str:
        adjective = self.rng.choice(self.adjectives)
        noun = self.rng.choice(self.nouns)
        return f"{adjective.capitalize()} {noun.capitalize()}"
