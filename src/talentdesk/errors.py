from __future__ import annotations


class TalentDeskError(Exception):
    """Base error carrying the HTTP status the API reports for it."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AIConfigurationError(TalentDeskError):
    status_code = 503


class UpstreamError(TalentDeskError):
    status_code = 502


class StructuredOutputError(UpstreamError):
    pass


class PipelineError(TalentDeskError):
    status_code = 400


class DuplicatePipelineError(PipelineError):
    status_code = 409


class NotFoundError(TalentDeskError):
    status_code = 404


class CompanyProfileError(TalentDeskError):
    status_code = 400


class InvalidInputError(TalentDeskError):
    status_code = 400
