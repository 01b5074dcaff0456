import pytest

from lendingwise.models import AnalysisResult
from lendingwise.services.dashboard import NO_HIDDEN_DEBT, build_dashboard, build_result_panel
from lendingwise.services.report_values import verdict_label
from lendingwise.services.session import SessionView


def test_result_panel(approve_result):
    panel = build_result_panel(approve_result)

    assert panel.verdict.label == "APPROVE"
    assert panel.verdict.tone == "positive"
    assert panel.verdict.repayment == "RM 450.00"
    assert [m.amount for m in panel.inflow] == ["RM 4,100", "RM 4,300"]
    assert panel.card_usage_label == "Verified"
    assert panel.hidden_loans[0].search_insight == "Listed as a licensed money lender."
    assert panel.hidden_loans_placeholder is None
    assert [(c.label, c.value) for c in panel.metrics] == [
        ("Suggested Limit", "RM 3,000"),
        ("Risk Ratio", "1:3"),
        ("Gov Servant", "YES"),
        ("Instalment", "RM 450.00"),
    ]


def test_conditional_takes_negative_tone():
    panel = build_result_panel(AnalysisResult.model_validate({"conclusion": {"decision": "Conditional"}}))
    assert panel.verdict.label == "CONDITIONAL"
    assert panel.verdict.tone == "negative"


def test_empty_result_uses_placeholders():
    panel = build_result_panel(AnalysisResult())

    assert panel.verdict.label == "REJECT"
    assert panel.verdict.tone == "negative"
    assert panel.verdict.repayment == "N/A"
    assert panel.verdict.interest_rate == "N/A"
    assert panel.salary_remarks == "Calculation verified against source."
    assert panel.card_usage_label == "Not Detected"
    assert panel.hidden_loans == []
    assert panel.hidden_loans_placeholder == NO_HIDDEN_DEBT
    assert panel.search_insights == []


def test_error_replaces_waiting_view(session):
    session.error = "Connection error."
    dash = build_dashboard(session)

    assert dash.view is SessionView.ERROR
    assert dash.error == "Connection error."
    assert dash.result is None


def test_can_submit_needs_files(session, attachment):
    assert build_dashboard(session).can_submit is False
    session.attachments = [attachment]
    assert build_dashboard(session).can_submit is True
    session.is_analyzing = True
    assert build_dashboard(session).can_submit is False


@pytest.mark.parametrize("decision, label", [
    ("Approved", "APPROVED"),
    ("Conditional Approval", "CONDITIONAL APPROVAL"),
    ("  approve with conditions ", "APPROVE WITH CONDITIONS"),
])
def test_unrecognised_decision_keeps_its_label(decision, label):
    result = AnalysisResult.model_validate({"conclusion": {"decision": decision}})
    panel = build_result_panel(result)

    assert verdict_label(result) == label
    assert panel.verdict.label == label
    assert panel.verdict.tone == "negative"
