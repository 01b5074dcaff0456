"""
Report model returned by the analysis provider.

The provider is asked for a fixed JSON shape but nothing guarantees every
field is populated, so the models here are the single place where missing
or null values turn into defaults. Renderers and exporters only ever see
fully-populated instances.
"""
import math
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def coerce_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.replace(",", "").replace("RM", "").strip()
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "y", "1"}
    return bool(value)


def compact(value: Any) -> Any:
    """Drop null entries from a list; anything that is not a list is left for validation."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


Number = Annotated[float, BeforeValidator(coerce_number)]
Text = Annotated[str, BeforeValidator(coerce_text)]
Flag = Annotated[bool, BeforeValidator(coerce_flag)]


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python, nulls treated as absent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


def _match_enum(enum_cls, value: Any, fallback=None):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    return fallback


class Decision(str, Enum):
    APPROVE = "Approve"
    REJECT = "Reject"
    CONDITIONAL = "Conditional"


class RiskStatus(str, Enum):
    SAFE = "Safe"
    HIGH_RISK = "High Risk - Potential Gambling"


class CommitmentCategory(str, Enum):
    LOAN = "Loan"
    INSURANCE = "Insurance"
    FINANCING = "Financing"
    OTHER = "Other"


class MonthlySalary(WireModel):
    month: Text = ""
    amount: Number = 0.0


class SalaryTally(WireModel):
    matches: Flag = False
    payslip_net_pay: Number = 0.0
    monthly_breakdown: Annotated[List[MonthlySalary], BeforeValidator(compact)] = Field(default_factory=list)
    remarks: Text = ""

    @property
    def average_inflow(self) -> float:
        if not self.monthly_breakdown:
            return 0.0
        return sum(m.amount for m in self.monthly_breakdown) / len(self.monthly_breakdown)


class HiddenLoan(WireModel):
    date: Text = ""
    amount: Number = 0.0
    description: Text = ""
    probable_lender: Text = ""
    search_verification: Optional[Text] = None


class Commitment(WireModel):
    description: Text = ""
    amount: Number = 0.0
    frequency: Text = ""
    category: CommitmentCategory = CommitmentCategory.OTHER

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value):
        return _match_enum(CommitmentCategory, value, CommitmentCategory.OTHER)


class AtmCheck(WireModel):
    date: Text = ""
    description: Text = ""
    amount: Number = 0.0


class RiskAssessment(WireModel):
    gambling_transactions: Number = 0.0
    status: Optional[RiskStatus] = None
    details: Annotated[List[Text], BeforeValidator(compact)] = Field(default_factory=list)
    has_debit_card_usage: Flag = False

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _match_enum(RiskStatus, value)


class GovernmentAid(WireModel):
    detected: Flag = False
    is_gov_servant: Flag = False
    average_monthly_amount: Number = 0.0
    remarks: Text = ""


class Conclusion(WireModel):
    # Raw decision text as the provider wrote it; ``verdict`` is the matched enum.
    decision: Text = ""
    suggested_amount: Text = ""
    interest_rate: Text = ""
    monthly_repayment: Text = ""
    risk_reward_ratio: Text = ""
    explanation: Text = ""

    @property
    def verdict(self) -> Optional[Decision]:
        return _match_enum(Decision, self.decision)

    @property
    def is_approved(self) -> bool:
        # Only an explicit approval takes the positive path; Conditional does not.
        return self.verdict is Decision.APPROVE


class SearchInsight(WireModel):
    transaction: Text = ""
    company_info: Text = ""
    risk_level: Text = ""
    sources: Annotated[List[Text], BeforeValidator(compact)] = Field(default_factory=list)


class AnalysisResult(WireModel):
    salary_tally: SalaryTally = Field(default_factory=SalaryTally)
    hidden_loans: Annotated[List[HiddenLoan], BeforeValidator(compact)] = Field(default_factory=list)
    commitments: Annotated[List[Commitment], BeforeValidator(compact)] = Field(default_factory=list)
    atm_checks: Annotated[List[AtmCheck], BeforeValidator(compact)] = Field(default_factory=list)
    risk_assessment: RiskAssessment = Field(default_factory=RiskAssessment)
    government_aid: GovernmentAid = Field(default_factory=GovernmentAid)
    conclusion: Conclusion = Field(default_factory=Conclusion)
    search_insights: Annotated[List[SearchInsight], BeforeValidator(compact)] = Field(default_factory=list)

    @property
    def debt_risk(self) -> str:
        return "HIGH" if self.hidden_loans else "LOW"

    @property
    def card_status(self) -> str:
        return "ACTIVE" if self.risk_assessment.has_debit_card_usage else "NO USAGE FOUND"
