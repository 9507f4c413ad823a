from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from talentdesk.db.base import Base, TimestampMixin


class CompanyProfile(TimestampMixin, Base):
    __tablename__ = "company_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    culture: Mapped[str] = mapped_column(Text, default="", nullable=False)
    org_structure: Mapped[str] = mapped_column(Text, default="", nullable=False)
    guidelines: Mapped[str] = mapped_column(Text, default="", nullable=False)


class CompanyFile(TimestampMixin, Base):
    __tablename__ = "company_files"
    __table_args__ = (UniqueConstraint("profile_id", "name", name="uq_company_file_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    profile_id: Mapped[int] = mapped_column(ForeignKey("company_profiles.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), default="", nullable=False)


class Pipeline(TimestampMixin, Base):
    __tablename__ = "pipelines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # SQLite compares with BINARY collation, so names stay case-sensitive
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class PipelineEntry(TimestampMixin, Base):
    __tablename__ = "pipeline_entries"
    # AUTOINCREMENT so ids of deleted entries are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    pipeline_id: Mapped[int] = mapped_column(ForeignKey("pipelines.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    candidate_name: Mapped[str] = mapped_column(String(255), nullable=False)

    anonymized_result: Mapped[str] = mapped_column(Text, default="", nullable=False)
    fit_summary_result: Mapped[str] = mapped_column(Text, default="", nullable=False)

    job_title: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    application_status: Mapped[str] = mapped_column(String(20), default="", nullable=False)
    feedback_message: Mapped[str] = mapped_column(Text, default="", nullable=False)
