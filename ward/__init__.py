"""Surgical ward application.

Staff accounts and sessions, the role based access gate, patient records
with their archive, bed counters, follow-up notes and media, the staff
bulletin board and the dashboard statistics.
"""
