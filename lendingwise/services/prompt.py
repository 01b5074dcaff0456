"""
Instruction block and response schema sent with every audit request.
"""

AUDIT_PROMPT = """
Act as an Elite High-Risk Senior Loan Underwriter specialized in the Malaysian personal loan market.
Task: Conduct an exhaustive financial autopsy on the provided bank statements and payslips.

AGENT PRE-STUDY NOTES (PRIORITY):
{notes}
Investigate every detail mentioned by the agent. If they suspect a specific lender, dig through the transactions.

EXHAUSTIVE UNDERWRITING TASKS:
1. DEEP SEARCH & ENTITY VERIFICATION:
   - Identify every credit inflow from non-standard entities (Enterprise, Trading, Resources, Capital).
   - Verify whether these are licensed money lenders (Kredit Komuniti), debt collectors, or private loan providers.
   - Specifically look for known salary advance apps like Paywatch, Wagely, or similar.

2. INCOME RECONSTRUCTION & AID:
   - Calculate exact monthly income. If payslips aren't provided (Government Aid cases), reconstruct income from credit entries.
   - Identify Government Aid (STR, SARA, BPN, JKM).
   - Mention if the customer is a government servant or private sector.

3. RIGOROUS RISK PROFILING:
   - SALARY ADVANCES: Identify source-deducted advances. This is a critical red flag.
   - ATM CUSTODY & PHYSICAL USAGE: Verify physical card presence via "SALE-DEBIT", "POS", or physical merchants (Shell, Petron, Mydin).
   - GAMBLING & LIQUIDITY: Detect frequency of e-wallet top-ups. >10 top-ups/month or gaming platforms = High Risk.

4. LOAN STRUCTURING (10 MONTHS):
   - Private Sector: 8-10% interest/month.
   - Government/GLC: 6% interest/month.
   - Total Repayment = (Principal / 10) + (Principal * Monthly Rate).

OUTPUT REQUIREMENTS:
- Provide a hyper-detailed JSON response.
- "conclusion.decision" must be one of: Approve, Reject, Conditional.
- "riskAssessment.status" must be one of: Safe, High Risk - Potential Gambling.
- "commitments[].category" must be one of: Loan, Insurance, Financing, Other.
- The "explanation" must be a 3-paragraph executive summary detailing Cashflow Stability, Risk Exposure (Lenders/Gambling), and Final Rationale.
"""

NO_NOTES = "None provided."


def build_prompt(context_note: str = "") -> str:
    return AUDIT_PROMPT.format(notes=context_note.strip() or NO_NOTES)


def _obj(properties: dict, required: list = None) -> dict:
    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _arr(items: dict) -> dict:
    return {"type": "array", "items": items}


_STR = {"type": "string"}
_NUM = {"type": "number"}
_BOOL = {"type": "boolean"}

ANALYSIS_SCHEMA = _obj({
    "salaryTally": _obj(
        {
            "matches": _BOOL,
            "payslipNetPay": _NUM,
            "monthlyBreakdown": _arr(_obj({"month": _STR, "amount": _NUM})),
            "remarks": _STR,
        },
        required=["monthlyBreakdown", "remarks"],
    ),
    "hiddenLoans": _arr(_obj({
        "date": _STR,
        "amount": _NUM,
        "description": _STR,
        "probableLender": _STR,
        "searchVerification": _STR,
    })),
    "commitments": _arr(_obj({
        "description": _STR,
        "amount": _NUM,
        "frequency": _STR,
        "category": _STR,
    })),
    "atmChecks": _arr(_obj({
        "date": _STR,
        "description": _STR,
        "amount": _NUM,
    })),
    "riskAssessment": _obj({
        "gamblingTransactions": _NUM,
        "status": _STR,
        "details": _arr(_STR),
        "hasDebitCardUsage": _BOOL,
    }),
    "governmentAid": _obj({
        "detected": _BOOL,
        "isGovServant": _BOOL,
        "averageMonthlyAmount": _NUM,
        "remarks": _STR,
    }),
    "conclusion": _obj(
        {
            "decision": _STR,
            "suggestedAmount": _STR,
            "interestRate": _STR,
            "monthlyRepayment": _STR,
            "riskRewardRatio": _STR,
            "explanation": _STR,
        },
        required=["decision", "monthlyRepayment", "explanation"],
    ),
    "searchInsights": _arr(_obj({
        "transaction": _STR,
        "companyInfo": _STR,
        "riskLevel": _STR,
        "sources": _arr(_STR),
    })),
})

# Optional sections are part of the contract, which strict mode would forbid.
RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {"name": "analysis_result", "schema": ANALYSIS_SCHEMA, "strict": False},
}
