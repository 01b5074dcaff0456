import json

import httpx

from lendingwise.models import AnalysisResult
from lendingwise.services.pdf_generation import APPROVE_GREEN, render_report
from tests.conftest import COMPLETIONS_URL, completion


def test_approve_audit_end_to_end(client, session, mock_llm_router, approve_payload):
    route = mock_llm_router.post(COMPLETIONS_URL).respond(200, json=completion(json.dumps(approve_payload)))

    # 1. One attachment, no context note
    upload = client.post("/session/files", files=[("files", ("statement.pdf", b"%PDF-1.4", "application/pdf"))])
    assert upload.json()["attachments"] == ["statement.pdf"]

    # 2. Run the audit
    data = client.post("/session/analyze").json()
    assert route.call_count == 1
    prompt = json.loads(route.calls.last.request.content)["messages"][0]["content"][-1]["text"]
    assert "None provided." in prompt

    # 3. Dashboard
    verdict = data["result"]["verdict"]
    assert verdict["label"] == "APPROVE"
    assert verdict["tone"] == "positive"
    assert verdict["repayment"] == "RM 450.00"

    # 4. Export
    pdf = render_report(session.result, timestamp_ms=1)
    assert pdf.verdict_color == APPROVE_GREEN
    assert pdf.tables_rendered == 2

    report = client.get("/session/report")
    assert report.status_code == 200
    assert report.headers["content-type"] == "application/pdf"


def test_transport_failure_end_to_end(client, session, mock_llm_router):
    mock_llm_router.post(COMPLETIONS_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    client.post("/session/files", files=[("files", ("statement.pdf", b"%PDF-1.4", "application/pdf"))])
    data = client.post("/session/analyze").json()

    assert session.result is None
    assert data["result"] is None
    assert data["error"]
    assert data["view"] == "error"

    page = client.get("/").text
    assert "Critical Error" in page
    assert "Waiting for Financial Feed" not in page


def test_sparse_provider_response_renders(client, session, mock_llm_router):
    mock_llm_router.post(COMPLETIONS_URL).respond(
        200, json=completion('{"conclusion": {"decision": "Reject"}, "searchInsights": null}')
    )

    client.post("/session/files", files=[("files", ("slip.png", b"png", "image/png"))])
    data = client.post("/session/analyze").json()

    assert data["view"] == "result"
    assert data["result"]["hidden_loans_placeholder"] == "No High-Risk Private Debt Found"
    assert isinstance(session.result, AnalysisResult)
    assert render_report(session.result, timestamp_ms=1).tables_rendered == 1
    assert client.get("/").status_code == 200
