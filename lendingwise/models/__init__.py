from .intake import AnalysisRequest, FileAttachment
from .report import (
    AnalysisResult,
    AtmCheck,
    Commitment,
    CommitmentCategory,
    Conclusion,
    Decision,
    GovernmentAid,
    HiddenLoan,
    MonthlySalary,
    RiskAssessment,
    RiskStatus,
    SalaryTally,
    SearchInsight,
)
