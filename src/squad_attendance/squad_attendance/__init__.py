"""Squad Attendance package.

Feature modules (attendance, compliance, leave, reports, ...) with a thin Flask
controller layer on top of service and repository layers.
"""
