"""
Game rule configuration and validation.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    hand_size: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Number of cards dealt to each seat at game start"
    )
    regular_copies: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Identical copies of every character/body part regular card"
    )
    cascade_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Safety cap on automatic move/completion iterations"
    )
    max_hand_size: int = Field(
        default=10,
        ge=1,
        le=44,
        description="Hands larger than this are reported by state validation"
    )
    reshuffle_scored_cards: bool = Field(
        default=True,
        description="Refill an empty deck from cards removed by completed stacks"
    )
    strict_invariants: bool = Field(
        default=True,
        description="Re-validate the whole state after every engine mutation"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for deterministic shuffling (None = system random)"
    )

    @field_validator('max_hand_size')
    @classmethod
    def validate_max_hand_size(cls, v, info):
        """Validate maximum hand size is not below the dealt hand."""
        hand_size = info.data.get('hand_size', 5)
        if v < hand_size:
            raise ValueError(f'max_hand_size ({v}) must be >= hand_size ({hand_size})')
        return v

    def get_deck_size(self) -> int:
        """Get the total number of cards in the deck."""
        # 4 characters x 3 body parts, plus 4 character wilds, 3 position wilds, 1 universal
        return 4 * 3 * self.regular_copies + 8

    def get_initial_deck_size(self) -> int:
        """Cards left in the deck once both seats are dealt."""
        return self.get_deck_size() - 2 * self.hand_size


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
