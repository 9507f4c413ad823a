from __future__ import annotations

from talentdesk.config import Settings
from talentdesk.core.matching import join_recommendations, recommend_candidates, restrict_to_candidates
from talentdesk.core.runtime import count_profile_candidates, run_matching
from talentdesk.db.repositories import Repository
from talentdesk.db.session import SessionLocal
from talentdesk.llm.router import LLMRouter
from talentdesk.types import CandidateMatch, CandidateMatchResult, FeedbackEntryDraft, ProfileEntryDraft


def _router(provider) -> LLMRouter:
    return LLMRouter(settings=Settings(api_key="", search_enabled=False), provider=provider)


def _seed_entries(repo: Repository) -> tuple[int, int, int]:
    repo.create_pipeline("Engineering")
    repo.create_pipeline("Design")
    alpha = repo.append_entry(
        "Engineering",
        ProfileEntryDraft(candidate_name="Alpha", anonymized_result="Python, 6 years", fit_summary_result="Strong"),
    )
    beta = repo.append_entry(
        "Design",
        ProfileEntryDraft(candidate_name="Beta", anonymized_result="Figma, 3 years", fit_summary_result="Good"),
    )
    feedback = repo.append_entry(
        "Design",
        FeedbackEntryDraft(
            candidate_name="Gamma",
            job_title="Designer",
            application_status="HIRED",
            feedback_message="Welcome aboard!",
        ),
    )
    return alpha.id, beta.id, feedback.id


def test_restrict_to_candidates_discards_unknown_ids() -> None:
    result = CandidateMatchResult(
        recommendations=[
            CandidateMatch(candidate_id=1, match_score=80, justification="good"),
            CandidateMatch(candidate_id=99, match_score=95, justification="invented"),
        ]
    )

    restricted = restrict_to_candidates(result, [1, 2])

    assert [item.candidate_id for item in restricted.recommendations] == [1]


def test_join_recommendations_sorts_and_skips_non_profiles() -> None:
    with SessionLocal() as db:
        repo = Repository(db)
        alpha_id, beta_id, feedback_id = _seed_entries(repo)
        entries = [(name, row) for name, row in repo.all_profile_entries()]
        result = CandidateMatchResult(
            recommendations=[
                CandidateMatch(candidate_id=alpha_id, match_score=40, justification="partial"),
                CandidateMatch(candidate_id=beta_id, match_score=90, justification="strong"),
                CandidateMatch(candidate_id=feedback_id, match_score=99, justification="not a profile"),
                CandidateMatch(candidate_id=12345, match_score=100, justification="unknown"),
            ]
        )

        matches = join_recommendations(result, entries)

    assert [(item.candidate_name, item.pipeline_name) for item in matches] == [
        ("Beta", "Design"),
        ("Alpha", "Engineering"),
    ]
    assert matches[0].match_score == 90


def test_recommend_candidates_sends_only_profile_entries(fake_provider_factory) -> None:
    with SessionLocal() as db:
        repo = Repository(db)
        alpha_id, beta_id, _ = _seed_entries(repo)
        provider = fake_provider_factory(
            data={"recommendations": [{"candidateId": alpha_id, "matchScore": 150, "justification": "Python"}]}
        )

        matches = recommend_candidates(
            _router(provider),
            job_description="Senior Python engineer",
            entries=repo.all_profile_entries(),
        )

    assert [item.id for item in matches] == [alpha_id]
    assert matches[0].match_score == 100
    prompt = provider.calls[0]["user_query"]
    assert "Python, 6 years" in prompt
    assert "Figma, 3 years" in prompt
    assert "Welcome aboard!" not in prompt


def test_recommend_candidates_skips_model_for_blank_job_description(fake_provider_factory) -> None:
    provider = fake_provider_factory(data={"recommendations": []})
    with SessionLocal() as db:
        repo = Repository(db)
        _seed_entries(repo)
        matches = recommend_candidates(_router(provider), job_description="   ", entries=repo.all_profile_entries())

    assert matches == []
    assert provider.calls == []


def test_run_matching_reads_saved_profiles_and_counts_them(fake_provider_factory) -> None:
    with SessionLocal() as db:
        alpha_id, beta_id, _ = _seed_entries(Repository(db))
    provider = fake_provider_factory(
        data={
            "recommendations": [
                {"candidateId": beta_id, "matchScore": 61, "justification": "Design tooling"},
                {"candidateId": alpha_id, "matchScore": 88, "justification": "Python depth"},
            ]
        }
    )

    matches = run_matching("Senior Python engineer", router=_router(provider))

    assert count_profile_candidates() == 2
    assert [(item.candidate_name, item.pipeline_name, item.match_score) for item in matches] == [
        ("Alpha", "Engineering", 88),
        ("Beta", "Design", 61),
    ]
    assert provider.calls[0]["model"] == "gemini-2.5-pro"
