"""Mini README: Rate configuration record and its merge rules.

Structure:
    * RateSettings - pydantic model holding base job values, weekend helper
      bonuses, the informational fuel cost and the optional logo string.
    * DEFAULT_RATES - the hardcoded defaults every stored record merges over.

Stored data uses the camelCase keys of the original browser exports
(``mriRate``, ``helperBonusMRI`` ...). Unknown keys are ignored and absent
keys fall back to defaults so older files keep loading after new fields are
introduced. An explicit ``null`` rate reads as 0, mirroring how a blank form
field was saved.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RateSettings(BaseModel):
    """Operator-edited rates used by trip costing and the balance ledger."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    mri_rate: float = Field(150.0, alias="mriRate", ge=0)
    ct_rate: float = Field(100.0, alias="ctRate", ge=0)
    helper_bonus_mri: float = Field(60.0, alias="helperBonusMRI", ge=0)
    helper_bonus_ct: float = Field(40.0, alias="helperBonusCT", ge=0)
    # Informational only; never part of a trip total.
    fuel_cost_per_km: float = Field(2.50, alias="fuelCostPerKm", ge=0)
    logo: Optional[str] = None

    @field_validator(
        "mri_rate", "ct_rate", "helper_bonus_mri", "helper_bonus_ct", "fuel_cost_per_km",
        mode="before",
    )
    @classmethod
    def _blank_rate_is_zero(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0.0
        return value

    def merged_with(self, overrides: Mapping[str, Any]) -> "RateSettings":
        """Return a copy with ``overrides`` (alias or field names) applied on top."""

        payload = self.as_dict()
        for key, value in overrides.items():
            payload[_ALIASES.get(key, key)] = value
        return RateSettings.model_validate(payload)

    def as_dict(self) -> Dict[str, Any]:
        """Export using the persisted camelCase keys."""

        return self.model_dump(by_alias=True)


_ALIASES: Dict[str, str] = {
    name: field.alias for name, field in RateSettings.model_fields.items() if field.alias
}

DEFAULT_RATES = RateSettings()
