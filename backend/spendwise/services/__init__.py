"""
Domain services: querying, analytics, budgets and expense CRUD.
"""
