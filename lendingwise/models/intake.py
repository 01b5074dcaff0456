from typing import List

from pydantic import ConfigDict, Field, field_validator

from lendingwise.models.report import WireModel


class FileAttachment(WireModel):
    """Input: one uploaded document, base64 encoded."""
    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    encoded_content: str = Field(..., description="Plain base64, no data URL prefix")

    @field_validator("encoded_content", mode="before")
    @classmethod
    def _strip_data_url(cls, value):
        if isinstance(value, str) and value.startswith("data:") and "," in value:
            return value.split(",", 1)[1]
        return value

    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.encoded_content}"


class AnalysisRequest(WireModel):
    """Input: everything sent to the provider for one audit."""
    attachments: List[FileAttachment] = Field(default_factory=list)
    context_note: str = ""
