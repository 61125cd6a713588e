"""
New Hire Onboarding Module

Structure mirrors the request flow:
- auth: Session guard and session-change notifications
- domain: Domain models
- services: Business logic
- repositories: Data access
- api: REST API endpoints
"""
