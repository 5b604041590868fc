"""Configuration management for frontend application.

Handles backend URL, API endpoints, timeouts, and the lessons shown on the form.
"""
import os
from typing import List

# Backend base URL - defaults to localhost for development
# Can be overridden via environment variable or deployment config
BACKEND_BASE_URL: str = os.getenv("BACKEND_BASE_URL", "http://localhost:4000")

# API endpoint path for feedback submission and read-back
# Matches the FastAPI router prefix: /api/feedback
API_FEEDBACK_ENDPOINT: str = os.getenv("API_FEEDBACK_ENDPOINT", "/api/feedback")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "15"))

# Lessons rated on the form, in presentation order (comma-separated)
_DEFAULT_SUBJECTS = "Introduction,Core Concepts,Deep Dive,Hands-on Practice,Review & Q&A"
FEEDBACK_SUBJECTS: List[str] = [
    s.strip() for s in os.getenv("FEEDBACK_SUBJECTS", _DEFAULT_SUBJECTS).split(",") if s.strip()
]
