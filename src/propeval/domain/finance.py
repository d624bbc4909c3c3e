# src/propeval/domain/finance.py
"""
Financing helpers.

The engine never asks the caller for loan terms. Debt service is estimated
from two fixed policy assumptions below; they are not derived from the
property or from market data.
"""

# Assumed fixed annual mortgage rate (6.5% APR)
ASSUMED_MORTGAGE_RATE = 0.065

# Assumed amortization period in years
ASSUMED_LOAN_TERM_YEARS = 30


def monthly_mortgage_payment(principal: float, annual_rate: float, years: int) -> float:
    """
    Standard fixed-rate amortization formula:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    P = loan principal
    r = monthly interest rate
    n = number of payments (months)
    """
    if years <= 0:
        raise ValueError("years must be > 0")
    if principal < 0:
        raise ValueError("principal must be non-negative")
    if annual_rate < 0:
        raise ValueError("annual_rate must be non-negative")

    r = annual_rate / 12.0
    n = years * 12

    if r == 0:
        return principal / n

    numerator = r * (1 + r) ** n
    denom = (1 + r) ** n - 1
    return principal * (numerator / denom)
