from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from talentdesk.config import Settings, get_settings
from talentdesk.db.models import CompanyFile, CompanyProfile, Pipeline, PipelineEntry
from talentdesk.db.seed import DEFAULT_COMPANY_PROFILE
from talentdesk.errors import (
    CompanyProfileError,
    DuplicatePipelineError,
    NotFoundError,
    PipelineError,
)
from talentdesk.types import (
    CompanyProfileData,
    EntryDraft,
    FeedbackEntry,
    FeedbackEntryDraft,
    FileMetadata,
    Pipeline as PipelineView,
    ProfileEntry,
)

COMPANY_PROFILE_FIELDS = ("name", "culture", "org_structure", "guidelines")


@dataclass(slots=True)
class FileAddResult:
    added: list[FileMetadata] = field(default_factory=list)
    skipped: int = 0

    @property
    def messages(self) -> list[str]:
        messages = []
        if self.skipped:
            messages.append(f"Warning: {self.skipped} file(s) skipped (duplicate name).")
        messages.append(f"Added {len(self.added)} file(s) to the profile list.")
        return messages


def entry_from_row(row: PipelineEntry) -> ProfileEntry | FeedbackEntry:
    if row.type == "profile":
        return ProfileEntry(
            id=row.id,
            candidate_name=row.candidate_name,
            anonymized_result=row.anonymized_result,
            fit_summary_result=row.fit_summary_result,
        )
    return FeedbackEntry(
        id=row.id,
        candidate_name=row.candidate_name,
        job_title=row.job_title,
        application_status=row.application_status,
        feedback_message=row.feedback_message,
    )


class Repository:
    def __init__(self, session: Session, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()

    # company profile

    def get_company_profile(self) -> CompanyProfile:
        profile = self.session.scalar(select(CompanyProfile).order_by(CompanyProfile.id).limit(1))
        if profile is None:
            profile = CompanyProfile(**DEFAULT_COMPANY_PROFILE)
            self.session.add(profile)
            self.session.commit()
            self.session.refresh(profile)
        return profile

    def company_profile_data(self) -> CompanyProfileData:
        profile = self.get_company_profile()
        return CompanyProfileData(
            name=profile.name,
            culture=profile.culture,
            org_structure=profile.org_structure,
            guidelines=profile.guidelines,
            files=[
                FileMetadata(name=row.name, size=row.size, mime_type=row.mime_type)
                for row in self.list_company_files()
            ],
        )

    def update_company_profile(self, values: dict[str, str | None]) -> CompanyProfileData:
        profile = self.get_company_profile()
        for key in COMPANY_PROFILE_FIELDS:
            value = values.get(key)
            if value is None:
                continue
            if key == "name" and not value.strip():
                raise CompanyProfileError("Company name cannot be empty.")
            setattr(profile, key, value)

        self.session.commit()
        return self.company_profile_data()

    def list_company_files(self) -> list[CompanyFile]:
        profile = self.get_company_profile()
        statement = select(CompanyFile).where(CompanyFile.profile_id == profile.id).order_by(CompanyFile.id)
        return list(self.session.scalars(statement).all())

    def add_company_files(self, files: list[FileMetadata]) -> FileAddResult:
        profile = self.get_company_profile()
        existing = self.list_company_files()
        limit = self.settings.max_company_files
        if len(existing) + len(files) > limit:
            raise CompanyProfileError(
                f"Warning: Cannot add all files. Maximum {limit} documents allowed."
            )

        names = {row.name for row in existing}
        result = FileAddResult()
        for item in files:
            if item.name in names:
                result.skipped += 1
                continue
            names.add(item.name)
            self.session.add(
                CompanyFile(
                    profile_id=profile.id,
                    name=item.name,
                    size=item.size,
                    mime_type=item.mime_type,
                )
            )
            result.added.append(item)

        self.session.commit()
        return result

    def remove_company_file(self, name: str) -> None:
        profile = self.get_company_profile()
        row = self.session.scalar(
            select(CompanyFile).where(CompanyFile.profile_id == profile.id, CompanyFile.name == name)
        )
        if row is None:
            raise NotFoundError(f"File '{name}' is not attached to the profile.")
        self.session.delete(row)
        self.session.commit()

    # pipelines

    def list_pipelines(self) -> list[Pipeline]:
        return list(self.session.scalars(select(Pipeline).order_by(Pipeline.id)).all())

    def pipeline_names(self) -> list[str]:
        return [row.name for row in self.list_pipelines()]

    def get_pipeline(self, name: str) -> Pipeline | None:
        return self.session.scalar(select(Pipeline).where(Pipeline.name == name))

    def require_pipeline(self, name: str) -> Pipeline:
        pipeline = self.get_pipeline(name)
        if pipeline is None:
            raise NotFoundError(f'Pipeline "{name}" does not exist.')
        return pipeline

    def create_pipeline(self, name: str) -> Pipeline:
        trimmed = name.strip()
        if not trimmed:
            raise PipelineError("Pipeline name cannot be empty.")
        if "/" in trimmed:
            raise PipelineError("Pipeline name cannot contain \"/\".")
        if self.get_pipeline(trimmed) is not None:
            raise DuplicatePipelineError("A pipeline with this name already exists.")

        pipeline = Pipeline(name=trimmed)
        self.session.add(pipeline)
        self.session.commit()
        self.session.refresh(pipeline)
        return pipeline

    def delete_pipeline(self, name: str) -> None:
        pipeline = self.require_pipeline(name)
        self.session.execute(delete(PipelineEntry).where(PipelineEntry.pipeline_id == pipeline.id))
        self.session.delete(pipeline)
        self.session.commit()

    def pipeline_entries(self, name: str) -> list[PipelineEntry]:
        pipeline = self.require_pipeline(name)
        return self._entries_for(pipeline.id)

    def snapshot(self) -> list[PipelineView]:
        return [
            PipelineView(name=row.name, entries=[entry_from_row(item) for item in self._entries_for(row.id)])
            for row in self.list_pipelines()
        ]

    def append_entry(self, name: str, draft: EntryDraft) -> PipelineEntry:
        pipeline = self.get_pipeline(name)
        if pipeline is None:
            raise NotFoundError("Please select a pipeline to save to.")
        candidate_name = draft.candidate_name.strip()
        if not candidate_name:
            raise PipelineError("Please provide a candidate name before saving.")

        if isinstance(draft, FeedbackEntryDraft):
            if not draft.feedback_message.strip():
                raise PipelineError("Generate a feedback message before saving.")
            values = {
                "job_title": draft.job_title,
                "application_status": draft.application_status,
                "feedback_message": draft.feedback_message,
            }
        else:
            if not draft.anonymized_result.strip() or not draft.fit_summary_result.strip():
                raise PipelineError("Generate the unbiased profile and fit summary before saving.")
            values = {
                "anonymized_result": draft.anonymized_result,
                "fit_summary_result": draft.fit_summary_result,
            }

        next_position = self.session.scalar(
            select(func.count()).select_from(PipelineEntry).where(PipelineEntry.pipeline_id == pipeline.id)
        )
        row = PipelineEntry(
            pipeline_id=pipeline.id,
            position=next_position or 0,
            type=draft.type,
            candidate_name=candidate_name,
            **values,
        )
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def rename_entry(self, name: str, entry_id: int, candidate_name: str) -> PipelineEntry:
        row = self._require_entry(name, entry_id)
        trimmed = candidate_name.strip()
        if not trimmed:
            raise PipelineError("Candidate name cannot be empty.")
        row.candidate_name = trimmed
        self.session.commit()
        self.session.refresh(row)
        return row

    def delete_entry(self, name: str, entry_id: int) -> None:
        row = self._require_entry(name, entry_id)
        pipeline_id = row.pipeline_id
        self.session.delete(row)
        self.session.flush()
        self._renumber(self._entries_for(pipeline_id))
        self.session.commit()

    def move_entry(self, name: str, from_index: int, to_index: int) -> list[PipelineEntry]:
        pipeline = self.require_pipeline(name)
        entries = self._entries_for(pipeline.id)
        size = len(entries)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise PipelineError(f"Cannot move entry {from_index} to {to_index} in a pipeline of {size}.")

        moved = entries.pop(from_index)
        entries.insert(to_index, moved)
        self._renumber(entries)
        self.session.commit()
        return entries

    def all_profile_entries(self) -> list[tuple[str, PipelineEntry]]:
        statement = (
            select(Pipeline.name, PipelineEntry)
            .join(Pipeline, Pipeline.id == PipelineEntry.pipeline_id)
            .where(PipelineEntry.type == "profile")
            .order_by(Pipeline.id, PipelineEntry.position)
        )
        return [(pipeline_name, entry) for pipeline_name, entry in self.session.execute(statement).all()]

    def _entries_for(self, pipeline_id: int) -> list[PipelineEntry]:
        statement = (
            select(PipelineEntry)
            .where(PipelineEntry.pipeline_id == pipeline_id)
            .order_by(PipelineEntry.position, PipelineEntry.id)
        )
        return list(self.session.scalars(statement).all())

    def _require_entry(self, name: str, entry_id: int) -> PipelineEntry:
        pipeline = self.require_pipeline(name)
        row = self.session.get(PipelineEntry, entry_id)
        if row is None or row.pipeline_id != pipeline.id:
            raise NotFoundError(f'Entry {entry_id} is not in pipeline "{name}".')
        return row

    @staticmethod
    def _renumber(entries: list[PipelineEntry]) -> None:
        for index, entry in enumerate(entries):
            entry.position = index
