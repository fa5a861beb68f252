# accounts/__init__.py
"""
Accounts app - admin accounts and multi-tenancy for the job board.

This app provides:
- Company: Tenant model
- Admin: Admin / Super Admin accounts scoped to a company
- ActorContext: Authorization context utilities
- Commands: login, registration, admin and company management

Multi-tenancy is enforced at every layer through the ActorContext pattern.
"""
