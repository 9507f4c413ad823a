from __future__ import annotations

from dataclasses import dataclass

from talentdesk.errors import NotFoundError
from talentdesk.llm.prompts import FEEDBACK_PROMPT, FEEDBACK_SYSTEM_PROMPT
from talentdesk.llm.router import LLMRouter
from talentdesk.types import ApplicationStatus, CompanyProfileData


@dataclass(frozen=True, slots=True)
class FeedbackExample:
    name: str
    job: str
    company: str
    jd: str
    notes: str
    status: ApplicationStatus


FEEDBACK_EXAMPLES: dict[str, FeedbackExample] = {
    "HIRED": FeedbackExample(
        name="Elena Rodriguez",
        job="Senior Data Scientist",
        company="Acmekorps Technologies",
        jd=(
            "Seeking a Senior Data Scientist to lead our NLP initiatives. Must have 5+ years "
            "experience, expert Python, and TensorFlow. Role requires collaboration with engineering "
            "and product teams."
        ),
        notes=(
            "Elena demonstrated exceptional proficiency in Python and TensorFlow, exceeding "
            "expectations. Minor skill gap in project management tools, but strong cultural fit and "
            "deep technical expertise. Decision: HIRED."
        ),
        status="HIRED",
    ),
    "REJECTED": FeedbackExample(
        name="Marcus Chen",
        job="Frontend Developer",
        company="Innovate Labs",
        jd=(
            "We need an experienced Frontend Developer (React, 4+ years) skilled in performance "
            "optimization, complex state management (Redux/Zustand), and responsive design "
            "principles for high-traffic web apps."
        ),
        notes=(
            "Marcus has a good eye for design. Practical experience with advanced state management "
            "was limited. Code samples showed performance bottlenecks. Critical skill gap in "
            "optimizing large-scale applications. Decision: REJECTED."
        ),
        status="REJECTED",
    ),
    "REJECTED_PIPELINE": FeedbackExample(
        name="Chloe Davis",
        job="Product Manager",
        company="Velocity Solutions",
        jd=(
            "Seeking a Product Manager (B2B SaaS experience essential) to drive the roadmap for our "
            "enterprise platform. Requires deep market analysis skills and successful launch "
            "experience."
        ),
        notes=(
            "Chloe was an outstanding candidate with strong vision and communication. Final decision "
            "was due to needing more specific hands-on experience launching a B2B SaaS product in the "
            "last 12 months. Highly recommend for future PM roles. Decision: REJECTED, highly "
            "recommended for pipeline."
        ),
        status="REJECTED",
    ),
}


def get_example(key: str) -> FeedbackExample:
    example = FEEDBACK_EXAMPLES.get(key)
    if example is None:
        raise NotFoundError(f"Unknown feedback example '{key}'.")
    return example


def generate_feedback(
    router: LLMRouter,
    company: CompanyProfileData,
    *,
    candidate_name: str,
    job_title: str,
    company_name: str,
    job_description: str,
    notes: str,
    status: ApplicationStatus,
) -> str:
    system_prompt = FEEDBACK_SYSTEM_PROMPT.format(
        company_name=company.name,
        culture=company.culture,
        org_structure=company.org_structure,
    )
    user_query = FEEDBACK_PROMPT.format(
        candidate_name=candidate_name,
        job_title=job_title,
        company_name=company_name,
        status=status,
        job_description=job_description,
        notes=notes,
    )
    return router.generate_text(user_query, system_prompt, use_search=True)


def generate_example_feedback(router: LLMRouter, company: CompanyProfileData, key: str) -> tuple[FeedbackExample, str]:
    example = get_example(key)
    message = generate_feedback(
        router,
        company,
        candidate_name=example.name,
        job_title=example.job,
        company_name=example.company,
        job_description=example.jd,
        notes=example.notes,
        status=example.status,
    )
    return example, message
