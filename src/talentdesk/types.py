from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ApplicationStatus = Literal["HIRED", "REJECTED"]
CompanyField = Literal["culture", "orgStructure", "guidelines"]
EntryType = Literal["profile", "feedback"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileMetadata(CamelModel):
    name: str = Field(min_length=1)
    size: int = Field(default=0, ge=0)
    mime_type: str = ""


class CompanyProfileData(CamelModel):
    name: str
    culture: str = ""
    org_structure: str = ""
    guidelines: str = ""
    files: list[FileMetadata] = Field(default_factory=list)


class InlineFile(CamelModel):
    base64: str = Field(min_length=1)
    mime_type: str = Field(min_length=1)
    name: str = ""


class BiasSuggestion(CamelModel):
    biased_phrase: str
    neutral_suggestion: str
    bias_type: str


class AuditResult(CamelModel):
    bias_score: int
    risk_level: str
    suggestions: list[BiasSuggestion]
    revised_job_description: str

    @field_validator("bias_score")
    @classmethod
    def clamp_score(cls, value: int) -> int:
        return max(1, min(10, value))


class CandidateMatch(CamelModel):
    candidate_id: int
    match_score: int
    justification: str

    @field_validator("match_score")
    @classmethod
    def clamp_score(cls, value: int) -> int:
        return max(1, min(100, value))


class CandidateMatchResult(CamelModel):
    recommendations: list[CandidateMatch] = Field(default_factory=list)


class ProfileEntryDraft(CamelModel):
    type: Literal["profile"] = "profile"
    candidate_name: str
    anonymized_result: str
    fit_summary_result: str


class FeedbackEntryDraft(CamelModel):
    type: Literal["feedback"] = "feedback"
    candidate_name: str
    job_title: str = ""
    application_status: ApplicationStatus
    feedback_message: str


EntryDraft = Annotated[Union[ProfileEntryDraft, FeedbackEntryDraft], Field(discriminator="type")]


class ProfileEntry(ProfileEntryDraft):
    id: int


class FeedbackEntry(FeedbackEntryDraft):
    id: int


PipelineEntry = Annotated[Union[ProfileEntry, FeedbackEntry], Field(discriminator="type")]


class Pipeline(CamelModel):
    name: str
    entries: list[PipelineEntry] = Field(default_factory=list)


class RecommendedCandidate(ProfileEntry):
    match_score: int
    justification: str
    pipeline_name: str


class ModelResponse(BaseModel):
    content: str
    raw: dict[str, Any] = Field(default_factory=dict)


class SearchSnippet(BaseModel):
    title: str
    url: str = ""
    snippet: str = ""
