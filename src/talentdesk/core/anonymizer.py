from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from pathlib import PurePath

from talentdesk.errors import InvalidInputError, UpstreamError
from talentdesk.llm.prompts import (
    ANONYMIZER_PROMPT,
    ANONYMIZER_SYSTEM_PROMPT,
    FIT_SUMMARY_PROMPT,
    FIT_SUMMARY_SYSTEM_PROMPT,
)
from talentdesk.llm.router import LLMRouter
from talentdesk.types import CompanyProfileData, InlineFile

logger = logging.getLogger(__name__)

_FAILURE_MARKER = "Could not generate content"


@dataclass(slots=True)
class UnbiasedProfile:
    anonymized_result: str
    fit_summary_result: str


def encode_upload(*, name: str, content: bytes, mime_type: str, max_bytes: int) -> InlineFile:
    if len(content) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise InvalidInputError(f"Error: {name} is too large (> {limit_mb}MB).")
    return InlineFile(
        name=name,
        base64=base64.b64encode(content).decode("ascii"),
        mime_type=mime_type or "application/octet-stream",
    )


def decoded_size(item: InlineFile) -> int:
    try:
        return len(base64.b64decode(item.base64, validate=True))
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"File {item.name or item.mime_type} is not valid base64.") from exc


def candidate_name_from_filename(filename: str) -> str:
    stem = PurePath(filename).stem
    return re.sub(r"[_.\-]", " ", stem).strip()


def generate_unbiased_profile(
    router: LLMRouter,
    company: CompanyProfileData,
    *,
    raw_text: str,
    files: list[InlineFile],
    max_bytes: int,
) -> UnbiasedProfile:
    if not raw_text.strip() and not files:
        raise InvalidInputError("Provide raw text or at least one document to anonymize.")
    for item in files:
        if decoded_size(item) > max_bytes:
            limit_mb = max_bytes // (1024 * 1024)
            raise InvalidInputError(f"Error: {item.name or 'file'} is too large (> {limit_mb}MB).")

    user_query = ANONYMIZER_PROMPT.format(raw_text=raw_text)
    anonymized = router.generate_multimodal(user_query, ANONYMIZER_SYSTEM_PROMPT, files)
    if not anonymized.strip() or _FAILURE_MARKER in anonymized:
        logger.warning("Anonymizer returned no usable content")
        raise UpstreamError("Failed to generate unbiased profile.")

    system_prompt = FIT_SUMMARY_SYSTEM_PROMPT.format(
        company_name=company.name,
        culture=company.culture,
        org_structure=company.org_structure,
    )
    fit_summary = router.generate_text(FIT_SUMMARY_PROMPT.format(anonymized_profile=anonymized), system_prompt)
    return UnbiasedProfile(anonymized_result=anonymized, fit_summary_result=fit_summary)
