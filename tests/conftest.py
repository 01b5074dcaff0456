import json
from io import BytesIO

import pytest
import respx
from fastapi.testclient import TestClient
from starlette.datastructures import Headers, UploadFile

from lendingwise.config.settings import settings
from lendingwise.main import app
from lendingwise.models import AnalysisResult, FileAttachment
from lendingwise.services.session import AuditSession, get_session

TEST_BASE_URL = "http://llm.test/v1"
COMPLETIONS_URL = f"{TEST_BASE_URL}/chat/completions"


def completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


def make_upload(filename: str, content: bytes = b"%PDF-1.4 test", content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(
        file=BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture(autouse=True)
def provider_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("API_KEY", "test-key")
    monkeypatch.setattr(settings, "PROVIDER_BASE_URL", TEST_BASE_URL)
    monkeypatch.setattr(settings, "PROVIDER_MODEL", "test-model")
    monkeypatch.setattr(settings, "REASONING_EFFORT", "")
    monkeypatch.setattr(settings, "FONT_PATH", tmp_path / "missing.ttf")


@pytest.fixture
def session():
    return AuditSession()


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_llm_router():
    """Intercept every call to the provider endpoint."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def approve_payload():
    return {
        "salaryTally": {
            "matches": True,
            "payslipNetPay": 4200,
            "monthlyBreakdown": [
                {"month": "Jan 2025", "amount": 4100},
                {"month": "Feb 2025", "amount": 4300},
            ],
            "remarks": "Salary credits match the payslip.",
        },
        "hiddenLoans": [
            {
                "date": "2025-02-03",
                "amount": 1500,
                "description": "IBG CR MAJU CAPITAL ENTERPRISE",
                "probableLender": "Maju Capital Enterprise",
                "searchVerification": "Listed as a licensed money lender.",
            }
        ],
        "commitments": [
            {"description": "Car loan", "amount": 650, "frequency": "Monthly", "category": "Loan"}
        ],
        "atmChecks": [{"date": "2025-02-10", "description": "SALE-DEBIT SHELL", "amount": 80}],
        "riskAssessment": {
            "gamblingTransactions": 0,
            "status": "Safe",
            "details": ["Regular POS usage at Mydin"],
            "hasDebitCardUsage": True,
        },
        "governmentAid": {
            "detected": False,
            "isGovServant": True,
            "averageMonthlyAmount": 0,
            "remarks": "",
        },
        "conclusion": {
            "decision": "Approve",
            "suggestedAmount": "RM 3,000",
            "interestRate": "6%",
            "monthlyRepayment": "RM 450.00",
            "riskRewardRatio": "1:3",
            "explanation": "Stable cashflow.\n\nOne private lender.\n\nApproved at government rate.",
        },
        "searchInsights": [
            {
                "transaction": "MAJU CAPITAL",
                "companyInfo": "Kredit Komuniti licence holder",
                "riskLevel": "Medium",
                "sources": ["https://example.com/registry"],
            }
        ],
    }


@pytest.fixture
def approve_result(approve_payload):
    return AnalysisResult.model_validate(approve_payload)


@pytest.fixture
def mock_analysis_response(mock_llm_router, approve_payload):
    return mock_llm_router.post(COMPLETIONS_URL).respond(
        status_code=200, json=completion(json.dumps(approve_payload))
    )


@pytest.fixture
def attachment():
    return FileAttachment(name="statement.pdf", mime_type="application/pdf", encoded_content="JVBERi0xLjQ=")
