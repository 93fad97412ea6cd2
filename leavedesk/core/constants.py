"""
Leave policy constants (BCEA defaults) and service metadata
"""
from datetime import date

SERVICE_NAME = "leavedesk-backend"

# Annual leave: 20 working days per leave cycle (calendar year), accrued monthly
ANNUAL_LEAVE_DAYS_PER_YEAR = 20
MONTHS_PER_CYCLE = 12

# Week- and month-denominated leave is charged by calendar span
DAYS_PER_WEEK = 7
DAYS_PER_YEAR = 365

# Unused brought-forward days lapse after this date in the cycle
FORFEIT_DEADLINE_MONTH = 7
FORFEIT_DEADLINE_DAY = 31

# Fixed allocations for leave types that do not accrue monthly.
# Units: sick/family/study/wellness in days, maternity in months, parental/adoption in weeks.
FIXED_ALLOCATIONS = {
    "sick": 36,
    "maternity": 3,
    "parental": 4,
    "family": 3,
    "adoption": 4,
    "study": 6,
    "wellness": 2,
}

LEAVE_UNITS = {
    "annual": "days",
    "sick": "days",
    "maternity": "months",
    "parental": "weeks",
    "family": "days",
    "adoption": "weeks",
    "study": "days",
    "wellness": "days",
}

EMPLOYEE_STATUS_ACTIVE = "Active"
EMPLOYEE_STATUS_INACTIVE = "Inactive"


def forfeit_deadline_for(year: int) -> date:
    return date(year, FORFEIT_DEADLINE_MONTH, FORFEIT_DEADLINE_DAY)
