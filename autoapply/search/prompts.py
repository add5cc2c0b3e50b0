"""Prompt builders for LLM-based job search."""

from __future__ import annotations

from autoapply.search.models import JobSearchRequest

JOB_SEARCH_SYSTEM_PROMPT = """You are an AI job search assistant. Your task is to find relevant job postings on job boards based on a user's profile and preferences.

You must follow these rules:
- Only return postings that plausibly exist on the requested job board.
- relevanceScore is a number between 0 and 1, with 1 being a perfect match for the profile.
- Output MUST be valid JSON only (no markdown), matching the required schema.
"""


def build_job_search_prompt(request: JobSearchRequest) -> str:
    """Build the user prompt for a job search."""
    return "\n".join(
        [
            f"User Profile: {request.user_profile}",
            f"Job Board: {request.job_board.value}",
            f"Keywords: {request.keywords or ''}",
            "",
            'Return a JSON object {"jobs": [...]} where each job posting has these fields:',
            "- title: The title of the job posting.",
            "- company: The company offering the job.",
            "- location: The location of the job.",
            "- url: The URL of the job posting.",
            "- description: The description of the job posting.",
            "- relevanceScore: How relevant the job is to the user profile (0 to 1).",
        ]
    )
