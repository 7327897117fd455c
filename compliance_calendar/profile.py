"""
Business profile captured by the compliance questionnaire.

Turnover and head-count are collected as brackets rather than exact
figures. Threshold rules compare against a fixed midpoint per bracket,
resolved through the lookup tables below.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BusinessType(Enum):
    MANUFACTURING = "Manufacturing"
    TRADING = "Trading"
    SERVICE = "Service"
    PROFESSIONAL = "Professional"


class TurnoverBracket(Enum):
    """Annual turnover ranges offered by the questionnaire (INR)."""

    BELOW_20L = "<20L"
    FROM_20L_TO_40L = "20L-40L"
    FROM_40L_TO_1CR = "40L-1Cr"
    FROM_1CR_TO_5CR = "1Cr-5Cr"
    FROM_5CR_TO_10CR = "5Cr-10Cr"
    ABOVE_10CR = ">10Cr"


class EmployeeBracket(Enum):
    BELOW_10 = "<10"
    FROM_10_TO_19 = "10-19"
    FROM_20_TO_49 = "20-49"
    FROM_50_TO_99 = "50-99"
    ABOVE_100 = "100+"


# -----------------------------------------------------------------------
# Bracket midpoints
# -----------------------------------------------------------------------

_TURNOVER_MIDPOINTS: dict[TurnoverBracket, int] = {
    TurnoverBracket.BELOW_20L: 1_000_000,  # 10 lakh
    TurnoverBracket.FROM_20L_TO_40L: 3_000_000,
    TurnoverBracket.FROM_40L_TO_1CR: 7_000_000,
    TurnoverBracket.FROM_1CR_TO_5CR: 30_000_000,
    TurnoverBracket.FROM_5CR_TO_10CR: 75_000_000,
    TurnoverBracket.ABOVE_10CR: 150_000_000,  # assumed, open-ended
}

_EMPLOYEE_MIDPOINTS: dict[EmployeeBracket, int] = {
    EmployeeBracket.BELOW_10: 5,
    EmployeeBracket.FROM_10_TO_19: 15,
    EmployeeBracket.FROM_20_TO_49: 35,
    EmployeeBracket.FROM_50_TO_99: 75,
    EmployeeBracket.ABOVE_100: 150,  # assumed, open-ended
}


def turnover_midpoint(bracket: TurnoverBracket) -> int:
    """Numeric turnover (INR) used for threshold comparisons."""
    return _TURNOVER_MIDPOINTS[bracket]


def employee_midpoint(bracket: EmployeeBracket) -> int:
    """Numeric head-count used for threshold comparisons."""
    return _EMPLOYEE_MIDPOINTS[bracket]


# -----------------------------------------------------------------------
# Known regions
# -----------------------------------------------------------------------

INDIAN_STATES: tuple[str, ...] = (
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chhattisgarh",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
)

UNION_TERRITORIES: tuple[str, ...] = (
    "Andaman and Nicobar Islands",
    "Chandigarh",
    "Dadra and Nagar Haveli and Daman and Diu",
    "Delhi",
    "Jammu and Kashmir",
    "Ladakh",
    "Lakshadweep",
    "Puducherry",
)

INDIAN_STATES_AND_UTS: tuple[str, ...] = INDIAN_STATES + UNION_TERRITORIES


# camelCase keys as submitted by the questionnaire front end
_FIELD_ALIASES: dict[str, str] = {
    "businessType": "business_type",
    "msmeRegistered": "msme_registered",
    "owesPaymentToMSME": "owes_payment_to_msme",
}


def _flag(data: dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class BusinessProfile:
    """
    Immutable snapshot of one questionnaire submission.

    The numeric turnover and employee figures are always derived from the
    brackets; there is no way to supply them independently.
    """

    business_type: BusinessType
    state: str
    industry: str
    turnover: TurnoverBracket
    employees: EmployeeBracket
    msme_registered: bool = False
    owes_payment_to_msme: bool = False

    @property
    def turnover_value(self) -> int:
        return turnover_midpoint(self.turnover)

    @property
    def employee_count(self) -> int:
        return employee_midpoint(self.employees)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BusinessProfile":
        """
        Build a profile from questionnaire data.

        Accepts snake_case or camelCase keys. Raises ValueError for a
        missing field or a value outside the enumerated options.
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"Profile must be a JSON object, got {type(data).__name__}"
            )
        normalized = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}
        try:
            return cls(
                business_type=BusinessType(normalized["business_type"]),
                state=str(normalized["state"]).strip(),
                industry=str(normalized.get("industry", "")).strip(),
                turnover=TurnoverBracket(normalized["turnover"]),
                employees=EmployeeBracket(normalized["employees"]),
                msme_registered=_flag(normalized, "msme_registered"),
                owes_payment_to_msme=_flag(normalized, "owes_payment_to_msme"),
            )
        except KeyError as e:
            raise ValueError(f"Missing profile field: {e.args[0]}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "business_type": self.business_type.value,
            "state": self.state,
            "industry": self.industry,
            "turnover": self.turnover.value,
            "annual_turnover_value": self.turnover_value,
            "employees": self.employees.value,
            "employee_count": self.employee_count,
            "msme_registered": self.msme_registered,
            "owes_payment_to_msme": self.owes_payment_to_msme,
        }
