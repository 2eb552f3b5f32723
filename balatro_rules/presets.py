"""
Preset configurations for runs.
Each preset is a starting deck that tweaks the default RunProperties.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .engine.run import RunProperties


class DeckType(Enum):
    STANDARD = "standard"  # Default deck
    RED = "red"            # +1 discard per round
    BLUE = "blue"          # +1 hand per round
    YELLOW = "yellow"      # +$10 starting money
    PAINTED = "painted"    # +2 hand size


@dataclass
class Preset:
    """A named set of overrides applied to the default run properties."""
    name: str
    description: str
    deck_type: DeckType = DeckType.STANDARD
    overrides: dict = field(default_factory=dict)


_DEFAULTS = RunProperties(seed="")

# Built-in presets
PRESETS = {
    "standard": Preset(
        name="Standard",
        description="Default run with no modifiers",
    ),

    "red_deck": Preset(
        name="Red Deck",
        description="Extra discard per round",
        deck_type=DeckType.RED,
        overrides={"max_discards": _DEFAULTS.max_discards + 1},
    ),

    "blue_deck": Preset(
        name="Blue Deck",
        description="Extra hand per round",
        deck_type=DeckType.BLUE,
        overrides={"max_hands": _DEFAULTS.max_hands + 1},
    ),

    "yellow_deck": Preset(
        name="Yellow Deck",
        description="Start with $10 extra",
        deck_type=DeckType.YELLOW,
        overrides={"starting_money": _DEFAULTS.starting_money + 10},
    ),

    "painted_deck": Preset(
        name="Painted Deck",
        description="+2 hand size",
        deck_type=DeckType.PAINTED,
        overrides={"hand_size": _DEFAULTS.hand_size + 2},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def get_preset_info(name: str) -> Optional[dict]:
    """Get info about a preset."""
    preset = get_preset(name)
    if preset:
        return {
            "name": preset.name,
            "description": preset.description,
            "deck": preset.deck_type.value,
            "overrides": dict(preset.overrides),
        }
    return None


def build_properties(preset: str = "standard", seed: str = None) -> RunProperties:
    """RunProperties for a preset, optionally with a fixed seed."""
    found = get_preset(preset)
    if found is None:
        raise KeyError(f"Unknown preset: {preset!r} (choose from {', '.join(PRESETS)})")
    properties = RunProperties(**found.overrides)
    if seed is not None:
        properties = replace(properties, seed=seed)
    return properties
