from typing import List, Optional

from pydantic import BaseModel

from lendingwise.models import AnalysisResult
from lendingwise.services.report_values import NOT_AVAILABLE, metrics_strip, verdict_label
from lendingwise.services.session import AuditSession, SessionView
from lendingwise.utils.formatting import format_ringgit, or_placeholder

NO_HIDDEN_DEBT = "No High-Risk Private Debt Found"
DEFAULT_SALARY_REMARKS = "Calculation verified against source."


class VerdictBanner(BaseModel):
    label: str
    tone: str
    repayment: str
    interest_rate: str


class InflowMonth(BaseModel):
    month: str
    amount: str


class LoanCard(BaseModel):
    lender: str
    amount: str
    description: str
    search_insight: Optional[str] = None


class CommitmentRow(BaseModel):
    description: str
    amount: str
    frequency: str
    category: str


class InsightRow(BaseModel):
    transaction: str
    company_info: str
    risk_level: str
    sources: List[str] = []


class MetricCell(BaseModel):
    label: str
    value: str


class ResultPanel(BaseModel):
    verdict: VerdictBanner
    inflow: List[InflowMonth]
    salary_remarks: str
    card_usage_verified: bool
    card_usage_label: str
    risk_details: List[str]
    hidden_loans: List[LoanCard]
    hidden_loans_placeholder: Optional[str] = None
    commitments: List[CommitmentRow]
    search_insights: List[InsightRow]
    explanation: str
    metrics: List[MetricCell]


class DashboardView(BaseModel):
    view: SessionView
    attachments: List[str]
    context_note: str
    is_analyzing: bool
    can_submit: bool
    rejected_files: List[str] = []
    error: Optional[str] = None
    result: Optional[ResultPanel] = None


def build_result_panel(result: AnalysisResult) -> ResultPanel:
    conclusion = result.conclusion
    card_used = result.risk_assessment.has_debit_card_usage

    return ResultPanel(
        verdict=VerdictBanner(
            label=verdict_label(result),
            tone="positive" if conclusion.is_approved else "negative",
            repayment=or_placeholder(conclusion.monthly_repayment, NOT_AVAILABLE),
            interest_rate=or_placeholder(conclusion.interest_rate, NOT_AVAILABLE),
        ),
        inflow=[
            InflowMonth(month=m.month, amount=format_ringgit(m.amount))
            for m in result.salary_tally.monthly_breakdown
        ],
        salary_remarks=or_placeholder(result.salary_tally.remarks, DEFAULT_SALARY_REMARKS),
        card_usage_verified=card_used,
        card_usage_label="Verified" if card_used else "Not Detected",
        risk_details=list(result.risk_assessment.details),
        hidden_loans=[
            LoanCard(
                lender=loan.probable_lender,
                amount=format_ringgit(loan.amount),
                description=loan.description,
                search_insight=loan.search_verification or None,
            )
            for loan in result.hidden_loans
        ],
        hidden_loans_placeholder=None if result.hidden_loans else NO_HIDDEN_DEBT,
        commitments=[
            CommitmentRow(
                description=c.description,
                amount=format_ringgit(c.amount),
                frequency=c.frequency,
                category=c.category.value,
            )
            for c in result.commitments
        ],
        search_insights=[
            InsightRow(
                transaction=s.transaction,
                company_info=s.company_info,
                risk_level=s.risk_level,
                sources=list(s.sources),
            )
            for s in result.search_insights
        ],
        explanation=conclusion.explanation,
        metrics=[MetricCell(label=label, value=value) for label, value in metrics_strip(result)],
    )


def build_dashboard(session: AuditSession) -> DashboardView:
    view = session.view
    return DashboardView(
        view=view,
        attachments=[a.name for a in session.attachments],
        context_note=session.context_note,
        is_analyzing=session.is_analyzing,
        can_submit=bool(session.attachments) and not session.is_analyzing,
        rejected_files=list(session.rejected_files),
        error=session.error,
        result=build_result_panel(session.result) if view is SessionView.RESULT else None,
    )
