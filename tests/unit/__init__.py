"""
Unit tests for MoveNow application components.

Unit tests exercise one component at a time. Fitbit is served by a mock
requests session and AWS by moto, so no network access is needed.
"""
