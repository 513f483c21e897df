"""
Test package for the MoveNow application.

Test Organization:
    unit/: Unit tests for models, services and the Lambda handler
    conftest.py: Pytest configuration, shared fixtures and payload builders
"""
