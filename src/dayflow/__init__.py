"""Dayflow: attendance, leave and payroll for a small organization."""
