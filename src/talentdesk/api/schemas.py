from __future__ import annotations

from typing import Any

from pydantic import Field, RootModel

from talentdesk.types import (
    ApplicationStatus,
    AuditResult,
    CamelModel,
    CandidateMatchResult,
    CompanyField,
    CompanyProfileData,
    EntryDraft,
    FileMetadata,
    InlineFile,
)


class TextRequest(CamelModel):
    user_query: str = Field(min_length=1)
    system_prompt: str = Field(min_length=1)
    use_search: bool = False


class MultimodalRequest(CamelModel):
    user_query: str = Field(min_length=1)
    system_prompt: str = Field(min_length=1)
    files: list[InlineFile] = Field(default_factory=list)


class StructuredRequest(CamelModel):
    user_query: str = Field(min_length=1)
    system_prompt: str = Field(min_length=1)
    response_schema: dict[str, Any] = Field(default_factory=dict)


class TextResponse(CamelModel):
    text: str


class StructuredResponse(CamelModel):
    result: Any


class GenerateFieldRequest(CamelModel):
    field: CompanyField
    company_name: str = Field(min_length=1)


class CompensationRequest(CamelModel):
    job_title: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    location: str = Field(min_length=1)
    industry: str = Field(min_length=1)
    company_name: str = Field(min_length=1)


class MatchCandidate(CamelModel):
    id: int
    anonymized_result: str = Field(min_length=1)


class MatchRequest(CamelModel):
    job_description: str = Field(min_length=1)
    candidates: list[MatchCandidate] = Field(min_length=1)


class MatchResponse(CamelModel):
    result: CandidateMatchResult


class CompanyProfileUpdate(CamelModel):
    name: str | None = None
    culture: str | None = None
    org_structure: str | None = None
    guidelines: str | None = None


class FileAddRequest(CamelModel):
    files: list[FileMetadata] = Field(min_length=1)


class FileAddResponse(CamelModel):
    profile: CompanyProfileData
    messages: list[str]


class PipelineCreateRequest(CamelModel):
    name: str


class EntryCreateRequest(RootModel[EntryDraft]):
    pass


class EntryRenameRequest(CamelModel):
    candidate_name: str


class ReorderRequest(CamelModel):
    from_index: int = Field(ge=0)
    to_index: int = Field(ge=0)


class AuditRequest(CamelModel):
    job_description: str = Field(min_length=1)


class AuditResponse(AuditResult):
    band: str


class ApplySuggestionRequest(CamelModel):
    job_description: str
    biased_phrase: str = Field(min_length=1)
    neutral_suggestion: str


class JobDescriptionResponse(CamelModel):
    job_description: str


class InterviewRequest(CamelModel):
    job_title: str = Field(min_length=1)
    key_skills: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    technical_count: int = Field(default=4, ge=1, le=10)
    behavioral_count: int = Field(default=4, ge=1, le=10)
    culture_count: int = Field(default=4, ge=1, le=10)


class FeedbackRequest(CamelModel):
    candidate_name: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    company_name: str | None = None
    job_description: str = ""
    notes: str = Field(min_length=1)
    status: ApplicationStatus = "REJECTED"


class FeedbackExampleResponse(CamelModel):
    candidate_name: str
    job_title: str
    company_name: str
    job_description: str
    notes: str
    status: ApplicationStatus
    text: str


class AnonymizeRequest(CamelModel):
    raw_text: str = ""
    files: list[InlineFile] = Field(default_factory=list)


class AnonymizeResponse(CamelModel):
    anonymized_result: str
    fit_summary_result: str
    suggested_name: str = ""


class BroadcastRequest(CamelModel):
    job_description: str = ""
