"""Mortgage and rental-yield arithmetic for the investment calculator."""

from pydantic import BaseModel, Field


class InvestmentInputs(BaseModel):
    property_price: float = Field(500_000, ge=0)
    down_payment: float = Field(100_000, ge=0)
    interest_rate: float = Field(6.5, ge=0, description="Annual rate, percent")
    loan_term: int = Field(20, gt=0, description="Years")
    rental_income: float = Field(3_000, ge=0, description="Per month")
    annual_expenses: float = Field(6_000, ge=0)


class InvestmentResult(BaseModel):
    loan_amount: int
    monthly_emi: int
    total_loan_cost: int
    total_interest: int
    monthly_profit: int
    yearly_profit: int
    roi: float


def monthly_emi(principal: float, annual_rate: float, years: int) -> float:
    """Equated monthly instalment for an amortizing loan.

    A 0% loan is repaid in equal principal-only instalments.
    """
    payments = years * 12
    if principal <= 0:
        return 0.0
    rate = annual_rate / 100 / 12
    if rate == 0:
        return principal / payments
    growth = (1 + rate) ** payments
    return principal * rate * growth / (growth - 1)


def calculate_investment(inputs: InvestmentInputs) -> InvestmentResult:
    principal = max(inputs.property_price - inputs.down_payment, 0)
    emi = monthly_emi(principal, inputs.interest_rate, inputs.loan_term)

    total_loan_cost = emi * inputs.loan_term * 12
    total_interest = total_loan_cost - principal

    monthly_expenses = inputs.annual_expenses / 12
    monthly_profit = inputs.rental_income - monthly_expenses - emi
    yearly_profit = inputs.rental_income * 12 - inputs.annual_expenses - emi * 12

    roi = (
        yearly_profit / inputs.property_price * 100 if inputs.property_price > 0 else 0.0
    )

    return InvestmentResult(
        loan_amount=round(principal),
        monthly_emi=round(emi),
        total_loan_cost=round(total_loan_cost),
        total_interest=round(total_interest),
        monthly_profit=round(monthly_profit),
        yearly_profit=round(yearly_profit),
        roi=round(roi, 2),
    )
