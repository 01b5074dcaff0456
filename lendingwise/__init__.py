from .models import AnalysisRequest, AnalysisResult, FileAttachment

__version__ = "1.0.0"
