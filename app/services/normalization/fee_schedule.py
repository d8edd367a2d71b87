"""Maintenance fee schedule configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class FeeScheduleError(ValueError):
    """Raised when a fee schedule is internally inconsistent."""


# USPTO maintenance fees fall due at 3.5, 7.5 and 11.5 years after grant;
# at year granularity these become grant_year + 3, 7 and 11.
DEFAULT_FEE_SCHEDULE: Dict[str, Any] = {
    "offsets": [3, 7, 11],
    "amounts": {"3": "2150.00", "7": "4040.00", "11": "8280.00"},
    "currency": "USD",
    "fee_type": "maintenance",
    "label_template": "{offset}-year maintenance fee",
}


@dataclass(frozen=True)
class FeeSchedule:
    """Ordered deadline offsets (years after grant) and the fee due at each.

    A single flat table stands in for what would really be a schedule keyed
    by jurisdiction, entity size and fee year.
    """

    offsets: Tuple[int, ...] = (3, 7, 11)
    amounts: Dict[int, Decimal] = field(
        default_factory=lambda: {
            3: Decimal("2150.00"),
            7: Decimal("4040.00"),
            11: Decimal("8280.00"),
        }
    )
    currency: str = "USD"
    fee_type: str = "maintenance"
    label_template: str = "{offset}-year maintenance fee"

    def __post_init__(self) -> None:
        if not self.offsets:
            raise FeeScheduleError("Fee schedule needs at least one offset")
        if len(set(self.offsets)) != len(self.offsets):
            raise FeeScheduleError(f"Duplicate offsets in fee schedule: {list(self.offsets)}")
        for offset in self.offsets:
            if offset <= 0:
                raise FeeScheduleError(f"Offsets must be positive years, got {offset}")
            amount = self.amounts.get(offset)
            if amount is None:
                raise FeeScheduleError(f"No fee amount configured for the {offset}-year deadline")
            if amount < 0:
                raise FeeScheduleError(f"Fee amount for offset {offset} is negative: {amount}")
        if not self.currency:
            raise FeeScheduleError("Currency code must not be empty")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "FeeSchedule":
        """Load a schedule from a JSON file, falling back to the defaults."""

        if path is None:
            data = DEFAULT_FEE_SCHEDULE
        else:
            with Path(path).expanduser().resolve().open("r", encoding="utf-8") as handle:
                user_config = json.load(handle)
            data = {**DEFAULT_FEE_SCHEDULE, **user_config}
            if isinstance(user_config.get("amounts"), dict):
                data["amounts"] = {**DEFAULT_FEE_SCHEDULE["amounts"], **user_config["amounts"]}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeeSchedule":
        try:
            offsets = tuple(int(offset) for offset in data["offsets"])
            amounts = {
                int(offset): Decimal(str(amount)).quantize(Decimal("0.01"))
                for offset, amount in data["amounts"].items()
            }
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise FeeScheduleError(f"Malformed fee schedule: {exc}") from exc
        return cls(
            offsets=offsets,
            amounts=amounts,
            currency=str(data.get("currency", DEFAULT_FEE_SCHEDULE["currency"])),
            fee_type=str(data.get("fee_type", DEFAULT_FEE_SCHEDULE["fee_type"])),
            label_template=str(data.get("label_template", DEFAULT_FEE_SCHEDULE["label_template"])),
        )

    def label(self, offset: int) -> str:
        return self.label_template.format(offset=offset)

    def amount_for(self, offset: int) -> Decimal:
        return self.amounts[offset]
