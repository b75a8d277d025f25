"""Configuration knobs for the sheet engine and point ledger.

Defaults match GURPS 4th Edition as the sheet has always computed it.
Campaigns with house rules may override costs or the attribute range.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class SheetConfig:
    """Tuneable parameters that aren't stored in the character record."""

    attribute_min: int = 1
    attribute_max: int = 200
    attribute_baseline: int = 10    # attributes cost nothing at this value
    default_point_total: int = 100

    # Cost per level above/below baseline
    st_cost: int = 10
    dx_cost: int = 20
    iq_cost: int = 20
    ht_cost: int = 10

    # Cost per level bought on secondary characteristics
    hp_cost: int = 2
    will_cost: int = 5
    per_cost: int = 5
    fp_cost: int = 3
    basic_speed_cost: int = 20      # per full point (5 per +0.25)
    basic_move_cost: int = 5

    status_cost_per_level: int = 5

    # Fold the social subtotal into total spent. Off by default: social
    # traits have always been shown as a separate subtotal only.
    include_social_costs: bool = False

    def clamp_attribute(self, value: int) -> int:
        return max(self.attribute_min, min(self.attribute_max, value))
