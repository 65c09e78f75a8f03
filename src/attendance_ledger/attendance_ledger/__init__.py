"""Attendance Ledger package.

Feature modules (attendance, leaves, balances, bonds) hold the pure
time-accounting and balance rules, with thin service/repository layers and a
Flask JSON adapter around them.

Only the monthly snapshot ledger is stored here (MySQL). The host application
owns attendance and leave storage: it passes its AttendanceRepository and
LeaveRepository to ``main.create_app`` / ``container.build_container``, which
build AttendanceService and LeaveService around them.
"""
