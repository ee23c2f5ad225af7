"""Integration tests for the sidebar against a real GitHub repository.

These tests write to a scratch repository named in .env.test. Every test runs
under its own content root and removes what it wrote afterwards.

Requirements:
- GITHUB_TOKEN, GITHUB_TEST_OWNER and GITHUB_TEST_REPO in .env.test
- Contents write permission on the scratch repository

Tests are skipped when .env.test is absent:
    pytest tests/integration -m github
"""
