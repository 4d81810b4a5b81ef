"""
OpenAI API Plumbing
-------------------
Shared HTTP handling and typed payloads for the OpenAI endpoints.
"""
