"""Prompt builders for LLM-based tailoring."""

from __future__ import annotations

from autoapply.tailoring.models import TailorRequest

TAILOR_SYSTEM_PROMPT = """You are an expert resume and cover letter tailoring assistant.

You must follow these rules:
- Tailor the provided documents to match the requirements and keywords of the job description.
- Do not invent employers, titles, dates, degrees, or achievements that are not in the resume.
- Keep plain text formatting; use "- " for bullet points.
- Output MUST be valid JSON only (no markdown), matching the required schema.
"""


def build_tailor_prompt(request: TailorRequest) -> str:
    """Build the user prompt for a tailoring request."""
    lines = [
        "Here is the resume:",
        request.resume,
        "",
        "Here is the job description:",
        request.job_description,
        "",
    ]

    if request.job_title:
        lines.extend(["Here is the job title:", request.job_title, ""])

    if request.has_cover_letter:
        lines.extend(
            [
                "Here is the existing cover letter:",
                request.cover_letter or "",
                "",
                "Return a JSON object with tailoredResume and tailoredCoverLetter.",
            ]
        )
    else:
        lines.append(
            "No cover letter was provided, so skip the cover letter. "
            "Return a JSON object with tailoredResume only."
        )

    return "\n".join(lines)
