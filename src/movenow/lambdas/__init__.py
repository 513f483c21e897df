"""
AWS Lambda functions for the MoveNow application.

Modules:
    move_now: Hourly step check triggered by a scheduled rule
"""

# Lambda function entry points are imported directly from their modules
# This allows for clean handler paths in the AWS SAM template
