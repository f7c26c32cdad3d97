"""
Audit pipeline: stages run in order over one AuditContext per run.
"""
