"""
Display values derived from an AnalysisResult.

Shared by the dashboard and the PDF export so both fall back to the same
placeholders.
"""
from typing import List, Tuple

from lendingwise.models import AnalysisResult
from lendingwise.utils.formatting import format_ringgit, or_placeholder

NOT_AVAILABLE = "N/A"
DEFAULT_VERDICT = "REJECT"


def verdict_label(result: AnalysisResult) -> str:
    return result.conclusion.decision.strip().upper() or DEFAULT_VERDICT


def summary_rows(result: AnalysisResult) -> List[Tuple[str, str, str]]:
    card_used = result.risk_assessment.has_debit_card_usage
    return [
        ("Avg Monthly Inflow", format_ringgit(result.salary_tally.average_inflow), "Verified"),
        ("ATM Card Presence", result.card_status, "Pass" if card_used else "Critical"),
        ("Hidden Debt Risk", result.debt_risk, f"{len(result.hidden_loans)} Entities"),
        ("Risk Reward Ratio", or_placeholder(result.conclusion.risk_reward_ratio, NOT_AVAILABLE), "Engine Rated"),
    ]


def lender_rows(result: AnalysisResult) -> List[Tuple[str, str, str]]:
    return [
        (
            loan.probable_lender or "Unknown",
            loan.search_verification or loan.description or "No data",
            format_ringgit(loan.amount),
        )
        for loan in result.hidden_loans
    ]


def metrics_strip(result: AnalysisResult) -> List[Tuple[str, str]]:
    conclusion = result.conclusion
    return [
        ("Suggested Limit", or_placeholder(conclusion.suggested_amount, NOT_AVAILABLE)),
        ("Risk Ratio", or_placeholder(conclusion.risk_reward_ratio, NOT_AVAILABLE)),
        ("Gov Servant", "YES" if result.government_aid.is_gov_servant else "NO"),
        ("Instalment", or_placeholder(conclusion.monthly_repayment, NOT_AVAILABLE)),
    ]
