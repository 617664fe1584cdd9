"""Custom runtime client for the Lambda Runtime API."""
