"""HR calendar package.

Reconciles a user's attendance sessions, leave applications and public
holidays into one month calendar. Organized by feature modules (attendance,
leaves, holidays, month_calendar, ...) with a thin Flask controller layer over
service/repository layers.
"""
