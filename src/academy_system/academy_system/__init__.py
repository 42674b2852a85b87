"""Academy System package.

Student records, daily attendance logs and competition achievements for a
training academy, organized by feature modules (students, daily_logs,
achievements, attendance) with a thin Flask controller layer over
service/repository layers.
"""
